"""Ownership chain lookup: Task/Decision -> Feature -> Project.

The mutation layer uses this to find which Project's last_updated to touch
and which cache tags to invalidate.
"""

from enum import StrEnum
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devtrack.db.models.decision import Decision
from devtrack.db.models.feature import Feature
from devtrack.db.models.project import Project
from devtrack.db.models.task import Task


class EntityKind(StrEnum):
    PROJECT = "Project"
    FEATURE = "Feature"
    TASK = "Task"
    DECISION = "Decision"


async def find_owning_project_id(
    session: AsyncSession,
    kind: EntityKind,
    entity_id: UUID,
) -> UUID | None:
    """Return the id of the Project that (transitively) owns the entity.

    A Project owns itself. Returns None when the entity does not exist.
    """
    if kind == EntityKind.PROJECT:
        stmt = select(Project.id).where(Project.id == entity_id)
    elif kind == EntityKind.FEATURE:
        stmt = select(Feature.project_id).where(Feature.id == entity_id)
    elif kind == EntityKind.TASK:
        stmt = (
            select(Feature.project_id)
            .join(Task, Task.feature_id == Feature.id)
            .where(Task.id == entity_id)
        )
    elif kind == EntityKind.DECISION:
        stmt = (
            select(Feature.project_id)
            .join(Decision, Decision.feature_id == Feature.id)
            .where(Decision.id == entity_id)
        )
    else:
        raise ValueError(f"Unknown entity kind: {kind!r}")

    result = await session.execute(stmt)
    return result.scalar_one_or_none()
