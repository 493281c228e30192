"""Shared test fixtures for all test groups."""

import os

import pytest
from fakeredis import aioredis
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from devtrack.cache.service import CacheService
from devtrack.container import build_services
from devtrack.db.base import Base, create_engine


@pytest.fixture
async def engine(tmp_path) -> AsyncEngine:
    """Create a test engine with fresh tables.

    Defaults to a throwaway SQLite file (foreign keys on, so cascades work);
    set TEST_DATABASE_URL to run against PostgreSQL instead. Also sets the
    global session factory so get_session_factory() works inside tests.
    """
    import devtrack.db.base as db_mod

    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'devtrack_test.db'}"
    engine = create_engine(url)

    # Import all models so metadata is populated
    import devtrack.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    db_mod._engine = engine
    db_mod._session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    db_mod._engine = None
    db_mod._session_factory = None
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def redis_client():
    """Create a fake Redis client for testing."""
    client = aioredis.FakeRedis(decode_responses=True)
    yield client
    await client.flushall()
    await client.aclose()


@pytest.fixture
def cache(redis_client) -> CacheService:
    return CacheService(redis_client, ttl_seconds=60, prefix="test")


@pytest.fixture
def services(session_factory, redis_client):
    """Full service bundle over the test database and fake Redis."""
    return build_services(session_factory, redis_client)


@pytest.fixture
async def project(services):
    """A project with default status."""
    return await services.projects.create({"name": "E-Commerce Platform", "tech_stack": ["Next.js"]})


@pytest.fixture
async def feature(services, project):
    return await services.features.create(project.id, {"name": "Shopping Cart"})
