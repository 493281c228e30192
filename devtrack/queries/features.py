"""Feature read accessors.

Nested tasks / decisions are loaded only when asked for; unloaded relations
stay None on the read model rather than triggering lazy loads.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devtrack.db.models.feature import Feature
from devtrack.queries.common import column_values, parse_uuid
from devtrack.schemas.decisions import DecisionRead
from devtrack.schemas.features import FeatureRead
from devtrack.schemas.tasks import TaskRead


def _load_options(with_tasks: bool, with_decisions: bool) -> list:
    options = []
    if with_tasks:
        options.append(selectinload(Feature.tasks))
    if with_decisions:
        options.append(selectinload(Feature.decisions))
    return options


def to_feature_read(feature: Feature, *, with_tasks: bool = False, with_decisions: bool = False) -> FeatureRead:
    """Build a FeatureRead from a row whose requested relations are already loaded."""
    data = column_values(feature)
    if with_tasks:
        data["tasks"] = [TaskRead.model_validate(task) for task in feature.tasks]
    if with_decisions:
        data["decisions"] = [DecisionRead.model_validate(d) for d in feature.decisions]
    return FeatureRead.model_validate(data)


async def get_feature(
    session: AsyncSession,
    feature_id: UUID | str,
    *,
    with_tasks: bool = False,
    with_decisions: bool = False,
) -> FeatureRead | None:
    feature_uuid = parse_uuid(feature_id)
    if feature_uuid is None:
        return None

    result = await session.execute(
        select(Feature)
        .where(Feature.id == feature_uuid)
        .options(*_load_options(with_tasks, with_decisions))
    )
    feature = result.scalar_one_or_none()
    if feature is None:
        return None
    return to_feature_read(feature, with_tasks=with_tasks, with_decisions=with_decisions)


async def list_features_by_project(
    session: AsyncSession,
    project_id: UUID | str,
    *,
    with_tasks: bool = False,
    with_decisions: bool = False,
) -> list[FeatureRead]:
    """Features of a project, oldest first."""
    project_uuid = parse_uuid(project_id)
    if project_uuid is None:
        return []

    result = await session.execute(
        select(Feature)
        .where(Feature.project_id == project_uuid)
        .options(*_load_options(with_tasks, with_decisions))
        .order_by(Feature.created_at.asc())
    )
    return [
        to_feature_read(f, with_tasks=with_tasks, with_decisions=with_decisions)
        for f in result.scalars().all()
    ]


async def list_features(session: AsyncSession) -> list[FeatureRead]:
    """All features across projects, oldest first."""
    result = await session.execute(select(Feature).order_by(Feature.created_at.asc()))
    return [to_feature_read(f) for f in result.scalars().all()]
