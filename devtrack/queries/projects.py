"""Project read accessors."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from devtrack.db.models.feature import Feature
from devtrack.db.models.project import Project
from devtrack.domain.statuses import ProjectStatus
from devtrack.queries.common import column_values, parse_uuid
from devtrack.queries.features import to_feature_read
from devtrack.schemas.projects import ProjectRead


def _load_options(with_features: bool, with_tasks: bool, with_decisions: bool) -> list:
    if not with_features:
        return []
    options = [selectinload(Project.features)]
    if with_tasks:
        options.append(selectinload(Project.features).selectinload(Feature.tasks))
    if with_decisions:
        options.append(selectinload(Project.features).selectinload(Feature.decisions))
    return options


def to_project_read(
    project: Project,
    *,
    with_features: bool = False,
    with_tasks: bool = False,
    with_decisions: bool = False,
) -> ProjectRead:
    data = column_values(project)
    if with_features:
        data["features"] = [
            to_feature_read(f, with_tasks=with_tasks, with_decisions=with_decisions)
            for f in project.features
        ]
    return ProjectRead.model_validate(data)


async def get_project(
    session: AsyncSession,
    project_id: UUID | str,
    *,
    with_features: bool = False,
    with_tasks: bool = False,
    with_decisions: bool = False,
) -> ProjectRead | None:
    """Fetch one project, optionally with features (and their tasks / decisions).

    with_tasks / with_decisions imply with_features.
    """
    project_uuid = parse_uuid(project_id)
    if project_uuid is None:
        return None

    with_features = with_features or with_tasks or with_decisions
    result = await session.execute(
        select(Project)
        .where(Project.id == project_uuid)
        .options(*_load_options(with_features, with_tasks, with_decisions))
    )
    project = result.scalar_one_or_none()
    if project is None:
        return None
    return to_project_read(
        project,
        with_features=with_features,
        with_tasks=with_tasks,
        with_decisions=with_decisions,
    )


async def list_projects(
    session: AsyncSession,
    *,
    with_features: bool = False,
    with_tasks: bool = False,
) -> list[ProjectRead]:
    """All projects, most recently updated first."""
    with_features = with_features or with_tasks
    result = await session.execute(
        select(Project)
        .options(*_load_options(with_features, with_tasks, False))
        .order_by(Project.last_updated.desc())
    )
    return [
        to_project_read(p, with_features=with_features, with_tasks=with_tasks)
        for p in result.scalars().all()
    ]


async def get_active_project(session: AsyncSession) -> ProjectRead | None:
    """The most recently updated In Progress project, if any."""
    result = await session.execute(
        select(Project)
        .where(Project.status == ProjectStatus.IN_PROGRESS)
        .order_by(Project.last_updated.desc())
        .limit(1)
    )
    project = result.scalar_one_or_none()
    return to_project_read(project) if project else None
