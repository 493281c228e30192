"""ProjectService — create / update / rename / delete projects.

Deleting a project cascades to its features, tasks and decisions at the
storage layer (ON DELETE CASCADE).
"""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog.contextvars import bound_contextvars

from devtrack.cache import tags
from devtrack.db.base import utcnow
from devtrack.db.models.feature import Feature
from devtrack.db.models.project import Project
from devtrack.db.ownership import EntityKind
from devtrack.domain.statuses import ProjectStatus
from devtrack.queries.projects import to_project_read
from devtrack.schemas.projects import ProjectCreate, ProjectForm, ProjectRead, ProjectUpdate
from devtrack.services.mutation import MutationService, convert_form, require_uuid, validate_payload

logger = structlog.get_logger(__name__)


class ProjectService(MutationService):
    kind = EntityKind.PROJECT
    model = Project

    async def create(self, data: ProjectCreate | dict[str, Any]) -> ProjectRead:
        """Create a project. Status defaults to Planning, tech stack to []."""
        payload = validate_payload(ProjectCreate, data)

        async with self.transaction() as session:
            project = Project(
                name=payload.name,
                description=payload.description,
                status=payload.status or ProjectStatus.PLANNING,
                tech_stack=list(payload.tech_stack),
            )
            session.add(project)
            await session.flush()
            await session.refresh(project)
            result = to_project_read(project)

        logger.info("project_created", project_id=str(result.id), name=result.name)
        await self.invalidate([tags.PROJECTS, tags.DASHBOARD])
        return result

    async def create_from_form(self, form: ProjectForm | dict[str, Any]) -> ProjectRead:
        """Create from the project dialog payload (comma-separated tech stack)."""
        return await self.create(convert_form(ProjectForm, form, "to_create"))

    async def update(self, project_id: UUID | str, patch: ProjectUpdate | dict[str, Any]) -> ProjectRead:
        """Apply only the fields set on the patch; always refreshes last_updated.

        Feature pages show the project's name, so each of them goes stale too.
        """
        project_uuid = require_uuid(project_id, "Project")
        payload = validate_payload(ProjectUpdate, patch)
        changes = payload.changes()

        with bound_contextvars(entity="Project", entity_id=str(project_uuid)):
            async with self.transaction() as session:
                project = await self.load_or_404(session, project_uuid)
                feature_ids = await _feature_ids(session, project_uuid)
                self.apply_changes(project, changes)
                project.last_updated = utcnow()
                await session.flush()
                await session.refresh(project)
                result = to_project_read(project)

            logger.info("project_updated", fields=sorted(changes))
            await self.invalidate(
                tags.project_scope(project_uuid) + [tags.feature(feature_id) for feature_id in feature_ids]
            )
        return result

    async def update_from_form(self, project_id: UUID | str, form: ProjectForm | dict[str, Any]) -> ProjectRead:
        return await self.update(project_id, convert_form(ProjectForm, form, "to_update"))

    async def rename(self, project_id: UUID | str, name: str) -> ProjectRead:
        """Single-field update of the project name."""
        return await self.update(project_id, {"name": name})

    async def delete(self, project_id: UUID | str) -> None:
        """Delete the project and, through the storage cascade, everything under it."""
        project_uuid = require_uuid(project_id, "Project")

        with bound_contextvars(entity="Project", entity_id=str(project_uuid)):
            async with self.transaction() as session:
                await self.load_or_404(session, project_uuid)
                feature_ids = await _feature_ids(session, project_uuid)
                await session.execute(delete(Project).where(Project.id == project_uuid))

            logger.info("project_deleted", cascaded_features=len(feature_ids))

            stale = tags.project_scope(project_uuid) + [tags.project_features(project_uuid), tags.FEATURES]
            for feature_id in feature_ids:
                stale += [
                    tags.feature(feature_id),
                    tags.feature_tasks(feature_id),
                    tags.feature_decisions(feature_id),
                ]
            await self.invalidate(stale)


async def _feature_ids(session: AsyncSession, project_id: UUID) -> list[UUID]:
    result = await session.execute(select(Feature.id).where(Feature.project_id == project_id))
    return list(result.scalars().all())
