"""DashboardService: aggregate counts and project cards for the landing page.

Counts come from SQL aggregates; progress comes from the domain rollups.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devtrack.cache import tags
from devtrack.cache.service import CacheService
from devtrack.db.models.feature import Feature
from devtrack.db.models.project import Project
from devtrack.db.models.task import Task
from devtrack.domain.statuses import ProjectStatus, TaskStatus
from devtrack.queries.projects import list_projects
from devtrack.schemas.dashboard import DashboardResponse
from devtrack.services.view_service import summarize_project


class DashboardService:
    """Service layer for dashboard aggregation.

    All methods are orchestration; rollup logic lives in devtrack.domain.progress.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], cache: CacheService):
        self.session_factory = session_factory
        self.cache = cache

    async def get_dashboard(self) -> DashboardResponse:
        """Get dashboard data, served from cache until a mutation invalidates it."""
        data = await self.cache.get_or_compute(tags.DASHBOARD, self._load)
        return DashboardResponse.model_validate(data)

    async def _load(self) -> dict:
        async with self.session_factory() as session:
            total_projects = await self._count(session, select(func.count(Project.id)))
            active_projects = await self._count(
                session,
                select(func.count(Project.id)).where(Project.status == ProjectStatus.IN_PROGRESS),
            )
            total_features = await self._count(session, select(func.count(Feature.id)))
            total_tasks = await self._count(session, select(func.count(Task.id)))
            open_tasks = await self._count(
                session,
                select(func.count(Task.id)).where(Task.status != TaskStatus.DONE),
            )
            projects = await list_projects(session, with_tasks=True)

        summaries = [summarize_project(p) for p in projects]

        # Projects are ordered by last_updated desc, so the first In Progress one is current
        current_project = next(
            (s for s in summaries if s.status == ProjectStatus.IN_PROGRESS),
            None,
        )

        response = DashboardResponse(
            total_projects=total_projects,
            active_projects=active_projects,
            total_features=total_features,
            total_tasks=total_tasks,
            open_tasks=open_tasks,
            current_project=current_project,
            projects=summaries,
        )
        return response.model_dump(mode="json")

    @staticmethod
    async def _count(session: AsyncSession, stmt) -> int:
        result = await session.execute(stmt)
        return result.scalar() or 0
