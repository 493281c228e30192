"""ViewService — cached read models for the UI.

Every view goes through CacheService.get_or_compute under the tag that the
mutation layer invalidates, so a successful write makes exactly the
affected views stale.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devtrack.cache import tags
from devtrack.cache.service import CacheService
from devtrack.core.constants import RECENT_DECISIONS_LIMIT
from devtrack.domain.progress import count_done, progress_percentage, project_tasks
from devtrack.queries.common import parse_uuid
from devtrack.queries.decisions import list_decisions_by_project
from devtrack.queries.features import get_feature, list_features
from devtrack.queries.projects import get_project, list_projects
from devtrack.schemas.features import FeatureRead
from devtrack.schemas.projects import ProjectRead
from devtrack.schemas.views import FeatureIndexItem, FeatureView, ProjectSummary, ProjectView


def summarize_project(project: ProjectRead) -> ProjectSummary:
    """Project card with task rollup. The project must carry features with tasks."""
    tasks = project_tasks(project)
    return ProjectSummary(
        id=project.id,
        name=project.name,
        description=project.description,
        status=project.status,
        tech_stack=project.tech_stack,
        last_updated=project.last_updated,
        progress=progress_percentage(tasks),
        done_tasks=count_done(tasks),
        total_tasks=len(tasks),
    )


def feature_view(feature: FeatureRead, project_name: str | None = None) -> FeatureView:
    return FeatureView(
        **feature.model_dump(),
        progress=progress_percentage(feature.tasks or []),
        project_name=project_name,
    )


class ViewService:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], cache: CacheService):
        self.session_factory = session_factory
        self.cache = cache

    async def project_list(self) -> list[ProjectSummary]:
        """Project cards, most recently updated first."""

        async def load() -> list[dict]:
            async with self.session_factory() as session:
                projects = await list_projects(session, with_tasks=True)
            return [summarize_project(p).model_dump(mode="json") for p in projects]

        data = await self.cache.get_or_compute(tags.PROJECTS, load)
        return [ProjectSummary.model_validate(item) for item in data]

    async def project_detail(self, project_id: UUID | str) -> ProjectView | None:
        """Project page: features with their tasks, decisions and progress."""
        project_uuid = parse_uuid(project_id)
        if project_uuid is None:
            return None

        async def load() -> dict | None:
            async with self.session_factory() as session:
                project = await get_project(session, project_uuid, with_tasks=True, with_decisions=True)
                if project is None:
                    return None
                recent = await list_decisions_by_project(
                    session, project_uuid, limit=RECENT_DECISIONS_LIMIT
                )

            view = ProjectView(
                **project.model_dump(exclude={"features"}),
                features=[feature_view(f, project.name) for f in project.features or []],
                progress=progress_percentage(project_tasks(project)),
                recent_decisions=recent,
            )
            return view.model_dump(mode="json")

        data = await self.cache.get_or_compute(tags.project(project_uuid), load)
        return ProjectView.model_validate(data) if data is not None else None

    async def feature_detail(self, feature_id: UUID | str) -> FeatureView | None:
        """Feature page: tasks, decisions, progress and the owning project's name."""
        feature_uuid = parse_uuid(feature_id)
        if feature_uuid is None:
            return None

        async def load() -> dict | None:
            async with self.session_factory() as session:
                feature = await get_feature(session, feature_uuid, with_tasks=True, with_decisions=True)
                if feature is None:
                    return None
                project = await get_project(session, feature.project_id)
            project_name = project.name if project else None
            return feature_view(feature, project_name).model_dump(mode="json")

        data = await self.cache.get_or_compute(tags.feature(feature_uuid), load)
        return FeatureView.model_validate(data) if data is not None else None

    async def feature_index(self) -> list[FeatureIndexItem]:
        """Id, name and status of every feature (navigation lists)."""

        async def load() -> list[dict]:
            async with self.session_factory() as session:
                features = await list_features(session)
            return [
                FeatureIndexItem(id=f.id, name=f.name, status=f.status).model_dump(mode="json")
                for f in features
            ]

        data = await self.cache.get_or_compute(tags.FEATURES, load)
        return [FeatureIndexItem.model_validate(item) for item in data]
