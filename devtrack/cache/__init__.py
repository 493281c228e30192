"""View cache: Redis-backed get-or-compute with tag invalidation."""

from devtrack.cache.service import CacheService

__all__ = ["CacheService"]
