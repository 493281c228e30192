"""DecisionService — decisions recorded against a feature.

Pros and cons are always persisted as lists, never null.
"""

from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import delete
from structlog.contextvars import bound_contextvars

from devtrack.cache import tags
from devtrack.db.base import utcnow
from devtrack.db.models.decision import Decision
from devtrack.db.ownership import EntityKind
from devtrack.schemas.decisions import DecisionCreate, DecisionForm, DecisionRead, DecisionUpdate
from devtrack.services.mutation import MutationService, convert_form, require_uuid, touch_project, validate_payload

logger = structlog.get_logger(__name__)


def _decision_tags(project_id: UUID, feature_id: UUID, decision_id: UUID | None = None) -> list[str]:
    stale = tags.project_scope(project_id) + [tags.feature(feature_id), tags.feature_decisions(feature_id)]
    if decision_id is not None:
        stale.append(tags.decision(decision_id))
    return stale


class DecisionService(MutationService):
    kind = EntityKind.DECISION
    model = Decision

    async def create(self, feature_id: UUID | str, data: DecisionCreate | dict[str, Any]) -> DecisionRead:
        """Record a decision. Date defaults to now; pros/cons default to []."""
        feature_uuid = require_uuid(feature_id, "Feature")
        payload = validate_payload(DecisionCreate, data)

        async with self.transaction() as session:
            project_uuid = await self.owning_project_or_404(session, EntityKind.FEATURE, feature_uuid)
            decision = Decision(
                feature_id=feature_uuid,
                date=payload.date or utcnow(),
                text=payload.text,
                pros=list(payload.pros or []),
                cons=list(payload.cons or []),
                alternatives=payload.alternatives,
            )
            session.add(decision)
            await session.flush()
            await touch_project(session, project_uuid)
            await session.refresh(decision)
            result = DecisionRead.model_validate(decision)

        logger.info("decision_created", decision_id=str(result.id), feature_id=str(feature_uuid))
        await self.invalidate(_decision_tags(project_uuid, feature_uuid))
        return result

    async def create_from_form(self, feature_id: UUID | str, form: DecisionForm | dict[str, Any]) -> DecisionRead:
        """Create from the decision dialog (newline-separated pros/cons)."""
        return await self.create(feature_id, convert_form(DecisionForm, form, "to_create"))

    async def update(self, decision_id: UUID | str, patch: DecisionUpdate | dict[str, Any]) -> DecisionRead:
        decision_uuid = require_uuid(decision_id, "Decision")
        payload = validate_payload(DecisionUpdate, patch)
        changes = payload.changes()
        for list_field in ("pros", "cons"):
            if list_field in changes and changes[list_field] is None:
                changes[list_field] = []

        with bound_contextvars(entity="Decision", entity_id=str(decision_uuid)):
            async with self.transaction() as session:
                decision = await self.load_or_404(session, decision_uuid)
                project_uuid = await self.owning_project_or_404(session, self.kind, decision_uuid)
                self.apply_changes(decision, changes)
                await session.flush()
                await touch_project(session, project_uuid)
                await session.refresh(decision)
                result = DecisionRead.model_validate(decision)

            logger.info("decision_updated", fields=sorted(changes))
            await self.invalidate(_decision_tags(project_uuid, result.feature_id, decision_uuid))
        return result

    async def update_from_form(self, decision_id: UUID | str, form: DecisionForm | dict[str, Any]) -> DecisionRead:
        return await self.update(decision_id, convert_form(DecisionForm, form, "to_update"))

    async def delete(self, decision_id: UUID | str) -> None:
        decision_uuid = require_uuid(decision_id, "Decision")

        with bound_contextvars(entity="Decision", entity_id=str(decision_uuid)):
            async with self.transaction() as session:
                decision = await self.load_or_404(session, decision_uuid)
                feature_uuid = decision.feature_id
                project_uuid = await self.owning_project_or_404(session, self.kind, decision_uuid)
                await session.execute(delete(Decision).where(Decision.id == decision_uuid))
                await touch_project(session, project_uuid)

            logger.info("decision_deleted", feature_id=str(feature_uuid))
            await self.invalidate(_decision_tags(project_uuid, feature_uuid, decision_uuid))
