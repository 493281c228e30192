"""Composition root: wires settings, logging, database, Redis and services.

Replaces ambient globals for callers: the UI layer builds one ``Services``
bundle at startup and passes it where needed.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import structlog
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devtrack.cache.service import CacheService
from devtrack.core.config import Settings, get_settings
from devtrack.core.logging import configure_structlog
from devtrack.db import close_db, close_redis, get_redis, get_session_factory, init_db, init_redis
from devtrack.services.dashboard_service import DashboardService
from devtrack.services.decision_service import DecisionService
from devtrack.services.feature_service import FeatureService
from devtrack.services.project_service import ProjectService
from devtrack.services.search_service import SearchService
from devtrack.services.task_service import TaskService
from devtrack.services.view_service import ViewService

logger = structlog.get_logger(__name__)


@dataclass
class Services:
    cache: CacheService
    projects: ProjectService
    features: FeatureService
    tasks: TaskService
    decisions: DecisionService
    search: SearchService
    views: ViewService
    dashboard: DashboardService


def build_services(
    session_factory: async_sessionmaker[AsyncSession],
    redis: Redis,
    settings: Settings | None = None,
) -> Services:
    """Build the service bundle around one session factory and one cache."""
    settings = settings or get_settings()
    cache = CacheService(redis, ttl_seconds=settings.cache_ttl_seconds, prefix=settings.cache_prefix)
    return Services(
        cache=cache,
        projects=ProjectService(session_factory, cache),
        features=FeatureService(session_factory, cache),
        tasks=TaskService(session_factory, cache),
        decisions=DecisionService(session_factory, cache),
        search=SearchService(session_factory),
        views=ViewService(session_factory, cache),
        dashboard=DashboardService(session_factory, cache),
    )


@asynccontextmanager
async def lifespan(settings: Settings | None = None) -> AsyncIterator[Services]:
    """Startup/shutdown for an embedding application."""
    settings = settings or get_settings()
    configure_structlog(
        log_level="DEBUG" if settings.debug else settings.log_level,
        json_logs=settings.json_logs and not settings.debug,
        service_name=settings.app_name,
    )
    logger.info("startup_begin", app_name=settings.app_name, debug=settings.debug)

    await init_db(settings.database_url)
    logger.info("db_initialized")

    try:
        await init_redis(settings.redis_url)
        logger.info("redis_initialized")

        yield build_services(get_session_factory(), get_redis(), settings)
    finally:
        logger.info("shutdown_begin")
        await close_redis()
        await close_db()
        logger.info("shutdown_complete")
