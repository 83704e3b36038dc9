"""Cache store factory.

Builds the CacheStore selected by settings.cache_backend.
"""

from __future__ import annotations

from scribe.cache.keys import CacheKeys
from scribe.cache.memory import InMemoryCacheStore
from scribe.cache.redis import RedisCacheStore, create_redis_client
from scribe.cache.store import CacheStore
from scribe.config import settings


def create_cache_store(backend: str | None = None) -> CacheStore:
    """Create the configured cache store.

    Raises:
        ValueError: If the backend name is unknown.
    """
    backend = (backend or settings.cache_backend).lower()
    if backend == "redis":
        return RedisCacheStore(create_redis_client())
    if backend == "memory":
        return InMemoryCacheStore()
    raise ValueError(f"Unknown cache backend: {backend!r}")


def create_cache_keys() -> CacheKeys:
    """Key generator using the configured prefix and page size."""
    return CacheKeys(prefix=settings.cache_key_prefix, default_page_size=settings.page_size)
