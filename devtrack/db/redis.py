"""Shared Redis connection pool for the view cache."""

import redis.asyncio as redis
import structlog
from redis.exceptions import RedisError

from devtrack.core.config import get_settings
from devtrack.core.exceptions import StorageError

logger = structlog.get_logger(__name__)

_redis: redis.Redis | None = None


async def init_redis(url: str | None = None) -> None:
    """Initialize the shared Redis connection pool.

    Raises StorageError (and leaves nothing initialized) when the server
    does not answer the startup ping.
    """
    global _redis

    if _redis is not None:
        return

    settings = get_settings()
    redis_url = url or settings.redis_url

    client = redis.from_url(
        redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
        health_check_interval=settings.redis_health_check_interval,
    )

    try:
        await client.ping()
    except RedisError as exc:
        await client.aclose()
        logger.error("redis_unavailable", error=str(exc), error_type=type(exc).__name__)
        raise StorageError("View cache unavailable") from exc

    _redis = client


async def close_redis() -> None:
    """Close the Redis connection pool."""
    global _redis

    if _redis is not None:
        await _redis.aclose()
        _redis = None


def get_redis() -> redis.Redis:
    """Return the shared Redis client.

    Raises RuntimeError if init_redis() has not been called.
    """
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis
