"""Task read accessors."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devtrack.db.models.task import Task
from devtrack.queries.common import parse_uuid
from devtrack.schemas.tasks import TaskRead


async def get_task(session: AsyncSession, task_id: UUID | str) -> TaskRead | None:
    task_uuid = parse_uuid(task_id)
    if task_uuid is None:
        return None

    result = await session.execute(select(Task).where(Task.id == task_uuid))
    task = result.scalar_one_or_none()
    return TaskRead.model_validate(task) if task else None


async def list_tasks_by_feature(session: AsyncSession, feature_id: UUID | str) -> list[TaskRead]:
    """Tasks of a feature, oldest first."""
    feature_uuid = parse_uuid(feature_id)
    if feature_uuid is None:
        return []

    result = await session.execute(
        select(Task).where(Task.feature_id == feature_uuid).order_by(Task.created_at.asc())
    )
    return [TaskRead.model_validate(task) for task in result.scalars().all()]
