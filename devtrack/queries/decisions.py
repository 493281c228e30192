"""Decision read accessors."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devtrack.db.models.decision import Decision
from devtrack.db.models.feature import Feature
from devtrack.queries.common import parse_uuid
from devtrack.schemas.decisions import DecisionRead


async def get_decision(session: AsyncSession, decision_id: UUID | str) -> DecisionRead | None:
    decision_uuid = parse_uuid(decision_id)
    if decision_uuid is None:
        return None

    result = await session.execute(select(Decision).where(Decision.id == decision_uuid))
    decision = result.scalar_one_or_none()
    return DecisionRead.model_validate(decision) if decision else None


async def list_decisions_by_feature(session: AsyncSession, feature_id: UUID | str) -> list[DecisionRead]:
    """Decisions of a feature, most recent date first."""
    feature_uuid = parse_uuid(feature_id)
    if feature_uuid is None:
        return []

    result = await session.execute(
        select(Decision).where(Decision.feature_id == feature_uuid).order_by(Decision.date.desc())
    )
    return [DecisionRead.model_validate(d) for d in result.scalars().all()]


async def list_decisions_by_project(
    session: AsyncSession,
    project_id: UUID | str,
    *,
    limit: int | None = None,
) -> list[DecisionRead]:
    """Decisions across all features of a project, most recent date first."""
    project_uuid = parse_uuid(project_id)
    if project_uuid is None:
        return []

    stmt = (
        select(Decision)
        .join(Feature, Decision.feature_id == Feature.id)
        .where(Feature.project_id == project_uuid)
        .order_by(Decision.date.desc())
    )
    if limit is not None:
        stmt = stmt.limit(limit)

    result = await session.execute(stmt)
    return [DecisionRead.model_validate(d) for d in result.scalars().all()]
