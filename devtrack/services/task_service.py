"""TaskService — tasks under a feature."""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import delete
from structlog.contextvars import bound_contextvars

from devtrack.cache import tags
from devtrack.db.models.task import Task
from devtrack.db.ownership import EntityKind
from devtrack.domain.statuses import TaskStatus
from devtrack.schemas.tasks import TaskCreate, TaskForm, TaskRead, TaskUpdate
from devtrack.services.mutation import MutationService, convert_form, require_uuid, touch_project, validate_payload

logger = structlog.get_logger(__name__)


def _task_tags(project_id: UUID, feature_id: UUID, task_id: UUID | None = None) -> list[str]:
    stale = tags.project_scope(project_id) + [tags.feature(feature_id), tags.feature_tasks(feature_id)]
    if task_id is not None:
        stale.append(tags.task(task_id))
    return stale


class TaskService(MutationService):
    kind = EntityKind.TASK
    model = Task

    async def create(self, feature_id: UUID | str, data: TaskCreate | dict[str, Any]) -> TaskRead:
        """Create a task under an existing feature. Status defaults to To Do."""
        feature_uuid = require_uuid(feature_id, "Feature")
        payload = validate_payload(TaskCreate, data)

        async with self.transaction() as session:
            project_uuid = await self.owning_project_or_404(session, EntityKind.FEATURE, feature_uuid)
            task = Task(
                feature_id=feature_uuid,
                title=payload.title,
                description=payload.description,
                status=payload.status or TaskStatus.TODO,
                due_date=payload.due_date,
                effort_estimate=payload.effort_estimate,
            )
            session.add(task)
            await session.flush()
            await touch_project(session, project_uuid)
            await session.refresh(task)
            result = TaskRead.model_validate(task)

        logger.info("task_created", task_id=str(result.id), feature_id=str(feature_uuid))
        await self.invalidate(_task_tags(project_uuid, feature_uuid))
        return result

    async def create_from_form(self, feature_id: UUID | str, form: TaskForm | dict[str, Any]) -> TaskRead:
        return await self.create(feature_id, convert_form(TaskForm, form, "to_create"))

    async def update(self, task_id: UUID | str, patch: TaskUpdate | dict[str, Any]) -> TaskRead:
        task_uuid = require_uuid(task_id, "Task")
        payload = validate_payload(TaskUpdate, patch)
        changes = payload.changes()

        with bound_contextvars(entity="Task", entity_id=str(task_uuid)):
            async with self.transaction() as session:
                task = await self.load_or_404(session, task_uuid)
                project_uuid = await self.owning_project_or_404(session, self.kind, task_uuid)
                self.apply_changes(task, changes)
                await session.flush()
                await touch_project(session, project_uuid)
                await session.refresh(task)
                result = TaskRead.model_validate(task)

            logger.info("task_updated", fields=sorted(changes))
            await self.invalidate(_task_tags(project_uuid, result.feature_id, task_uuid))
        return result

    async def update_from_form(self, task_id: UUID | str, form: TaskForm | dict[str, Any]) -> TaskRead:
        return await self.update(task_id, convert_form(TaskForm, form, "to_update"))

    async def set_status(self, task_id: UUID | str, status: TaskStatus | str) -> TaskRead:
        """Move a task between board columns."""
        return await self.update(task_id, {"status": status})

    async def delete(self, task_id: UUID | str) -> None:
        task_uuid = require_uuid(task_id, "Task")

        with bound_contextvars(entity="Task", entity_id=str(task_uuid)):
            async with self.transaction() as session:
                task = await self.load_or_404(session, task_uuid)
                feature_uuid = task.feature_id
                project_uuid = await self.owning_project_or_404(session, self.kind, task_uuid)
                await session.execute(delete(Task).where(Task.id == task_uuid))
                await touch_project(session, project_uuid)

            logger.info("task_deleted", feature_id=str(feature_uuid))
            await self.invalidate(_task_tags(project_uuid, feature_uuid, task_uuid))
