"""CacheService — Redis-backed view cache with tag-based invalidation.

Keys:
- {prefix}:value:{key}  JSON-encoded cached value (with TTL)
- {prefix}:tag:{tag}    set of keys cached under the tag
- {prefix}:gen:{tag}    invalidation counter for the tag
"""

import json
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError, WatchError

from devtrack.core.exceptions import StorageError

logger = structlog.get_logger(__name__)


class CacheService:
    """Get-or-compute cache for read views, invalidated by tag.

    Injected into the mutation layer so "affected views become stale" is an
    explicit call rather than ambient global state.
    """

    def __init__(self, redis: Redis, *, ttl_seconds: int = 300, prefix: str = "devtrack"):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    def _value_key(self, key: str) -> str:
        return f"{self.prefix}:value:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self.prefix}:tag:{tag}"

    def _generation_key(self, tag: str) -> str:
        return f"{self.prefix}:gen:{tag}"

    async def get_or_compute(
        self,
        tag: str,
        loader: Callable[[], Awaitable[Any]],
        *,
        key: str | None = None,
    ) -> Any:
        """Return the cached value for key (defaults to tag), computing it on miss.

        The loader must return a JSON-serializable value. A backend failure
        raises StorageError; it never silently falls through to the loader.
        If the tag is invalidated while the loader runs, the computed value
        is returned but not stored.
        """
        key = key or tag
        value_key = self._value_key(key)
        generation_key = self._generation_key(tag)

        try:
            cached, generation = await self.redis.mget(value_key, generation_key)
        except RedisError as exc:
            raise StorageError(f"Cache read failed for {key}") from exc

        if cached is not None:
            logger.debug("cache_hit", key=key, tag=tag)
            return json.loads(cached)

        logger.debug("cache_miss", key=key, tag=tag)
        value = await loader()

        try:
            async with self.redis.pipeline(transaction=True) as pipe:
                await pipe.watch(generation_key)
                if await pipe.get(generation_key) != generation:
                    logger.debug("cache_store_skipped", key=key, tag=tag)
                    return value
                pipe.multi()
                pipe.set(value_key, json.dumps(value), ex=self.ttl_seconds)
                pipe.sadd(self._tag_key(tag), key)
                await pipe.execute()
        except WatchError:
            logger.debug("cache_store_skipped", key=key, tag=tag)
        except RedisError as exc:
            raise StorageError(f"Cache write failed for {key}") from exc

        return value

    async def invalidate(self, tag: str) -> int:
        """Drop every value cached under tag. Returns the number of keys removed."""
        tag_key = self._tag_key(tag)
        try:
            # Bump first so loaders already in flight do not store their result
            await self.redis.incr(self._generation_key(tag))
            members = await self.redis.smembers(tag_key)
            keys = [
                self._value_key(member.decode() if isinstance(member, bytes) else member)
                for member in members
            ]
            removed = await self.redis.delete(*keys) if keys else 0
            await self.redis.delete(tag_key)
        except RedisError as exc:
            raise StorageError(f"Cache invalidation failed for tag {tag}") from exc

        logger.debug("cache_invalidated", tag=tag, removed=removed)
        return removed

    async def invalidate_many(self, tags: Iterable[str]) -> None:
        """Invalidate each distinct tag once, preserving first-seen order."""
        for tag in dict.fromkeys(tags):
            await self.invalidate(tag)

    async def is_cached(self, key: str) -> bool:
        """True if a value is currently cached for key."""
        try:
            return bool(await self.redis.exists(self._value_key(key)))
        except RedisError as exc:
            raise StorageError(f"Cache read failed for {key}") from exc
