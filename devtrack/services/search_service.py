"""SearchService — case-insensitive substring search over project and feature names.

The two sub-searches are independent reads and run concurrently, each in
its own session. Results are not merged or ranked across entity types.
"""

import asyncio

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devtrack.core.constants import MIN_SEARCH_LENGTH, SEARCH_MAX_RESULTS
from devtrack.db.models.feature import Feature
from devtrack.db.models.project import Project
from devtrack.queries.common import column_values
from devtrack.queries.projects import to_project_read
from devtrack.schemas.projects import ProjectRead
from devtrack.schemas.search import FeatureSearchResult, SearchResults

logger = structlog.get_logger(__name__)


def like_pattern(query: str) -> str:
    """Wrap query in %...% with LIKE wildcards escaped (escape char: backslash)."""
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SearchService:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        min_length: int = MIN_SEARCH_LENGTH,
        max_results: int = SEARCH_MAX_RESULTS,
    ):
        self.session_factory = session_factory
        self.min_length = min_length
        self.max_results = max_results

    async def search_projects(self, query: str) -> list[ProjectRead]:
        """Projects whose name contains query, most recently updated first."""
        if not query or len(query) < self.min_length:
            return []

        async with self.session_factory() as session:
            result = await session.execute(
                select(Project)
                .where(Project.name.ilike(like_pattern(query), escape="\\"))
                .order_by(Project.last_updated.desc())
                .limit(self.max_results)
            )
            return [to_project_read(p) for p in result.scalars().all()]

    async def search_features(self, query: str) -> list[FeatureSearchResult]:
        """Features whose name contains query, newest first, with their project's name."""
        if not query or len(query) < self.min_length:
            return []

        async with self.session_factory() as session:
            result = await session.execute(
                select(Feature, Project.name)
                .join(Project, Feature.project_id == Project.id)
                .where(Feature.name.ilike(like_pattern(query), escape="\\"))
                .order_by(Feature.created_at.desc())
                .limit(self.max_results)
            )
            return [
                FeatureSearchResult.model_validate({**column_values(feature), "project_name": project_name})
                for feature, project_name in result.all()
            ]

    async def search(self, query: str) -> SearchResults:
        """Search both entity types. Short queries return empty lists without a DB call."""
        if not query or len(query) < self.min_length:
            return SearchResults()

        projects, features = await asyncio.gather(
            self.search_projects(query),
            self.search_features(query),
        )
        logger.debug("search_completed", query=query, projects=len(projects), features=len(features))
        return SearchResults(projects=projects, features=features)
