"""FeatureService — features under a project.

Every write refreshes the owning project's last_updated.
"""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import delete
from structlog.contextvars import bound_contextvars

from devtrack.cache import tags
from devtrack.db.models.feature import Feature
from devtrack.db.ownership import EntityKind
from devtrack.domain.statuses import FeatureStatus, Priority
from devtrack.queries.features import to_feature_read
from devtrack.schemas.features import FeatureCreate, FeatureForm, FeatureRead, FeatureUpdate
from devtrack.services.mutation import MutationService, convert_form, require_uuid, touch_project, validate_payload

logger = structlog.get_logger(__name__)


def _feature_tags(project_id: UUID, feature_id: UUID | None = None) -> list[str]:
    stale = tags.project_scope(project_id) + [tags.FEATURES, tags.project_features(project_id)]
    if feature_id is not None:
        stale.append(tags.feature(feature_id))
    return stale


class FeatureService(MutationService):
    kind = EntityKind.FEATURE
    model = Feature

    async def create(self, project_id: UUID | str, data: FeatureCreate | dict[str, Any]) -> FeatureRead:
        """Create a feature under an existing project.

        Priority defaults to Medium and status to To Do.

        Raises:
            ValidationError: invalid payload or malformed project id
            NotFoundError: project does not exist
        """
        project_uuid = require_uuid(project_id, "Project")
        payload = validate_payload(FeatureCreate, data)

        async with self.transaction() as session:
            await self.owning_project_or_404(session, EntityKind.PROJECT, project_uuid)
            feature = Feature(
                project_id=project_uuid,
                name=payload.name,
                description=payload.description,
                priority=payload.priority or Priority.MEDIUM,
                status=payload.status or FeatureStatus.TODO,
                effort_estimate=payload.effort_estimate,
            )
            session.add(feature)
            await session.flush()
            await touch_project(session, project_uuid)
            await session.refresh(feature)
            result = to_feature_read(feature)

        logger.info("feature_created", feature_id=str(result.id), project_id=str(project_uuid))
        await self.invalidate(_feature_tags(project_uuid))
        return result

    async def create_from_form(self, project_id: UUID | str, form: FeatureForm | dict[str, Any]) -> FeatureRead:
        return await self.create(project_id, convert_form(FeatureForm, form, "to_create"))

    async def update(self, feature_id: UUID | str, patch: FeatureUpdate | dict[str, Any]) -> FeatureRead:
        """Partial update; an empty patch still refreshes the project's last_updated."""
        feature_uuid = require_uuid(feature_id, "Feature")
        payload = validate_payload(FeatureUpdate, patch)
        changes = payload.changes()

        with bound_contextvars(entity="Feature", entity_id=str(feature_uuid)):
            async with self.transaction() as session:
                feature = await self.load_or_404(session, feature_uuid)
                project_uuid = await self.owning_project_or_404(session, self.kind, feature_uuid)
                self.apply_changes(feature, changes)
                await session.flush()
                await touch_project(session, project_uuid)
                await session.refresh(feature)
                result = to_feature_read(feature)

            logger.info("feature_updated", fields=sorted(changes))
            await self.invalidate(_feature_tags(project_uuid, feature_uuid))
        return result

    async def update_from_form(self, feature_id: UUID | str, form: FeatureForm | dict[str, Any]) -> FeatureRead:
        return await self.update(feature_id, convert_form(FeatureForm, form, "to_update"))

    async def rename(self, feature_id: UUID | str, name: str) -> FeatureRead:
        """Single-field update of the feature name."""
        return await self.update(feature_id, {"name": name})

    async def delete(self, feature_id: UUID | str) -> None:
        """Delete the feature; its tasks and decisions go with it."""
        feature_uuid = require_uuid(feature_id, "Feature")

        with bound_contextvars(entity="Feature", entity_id=str(feature_uuid)):
            async with self.transaction() as session:
                await self.load_or_404(session, feature_uuid)
                project_uuid = await self.owning_project_or_404(session, self.kind, feature_uuid)
                await session.execute(delete(Feature).where(Feature.id == feature_uuid))
                await touch_project(session, project_uuid)

            logger.info("feature_deleted", project_id=str(project_uuid))
            await self.invalidate(
                _feature_tags(project_uuid, feature_uuid)
                + [tags.feature_tasks(feature_uuid), tags.feature_decisions(feature_uuid)]
            )
