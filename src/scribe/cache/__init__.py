"""Cache layer for Scribe.

Provides the cache-aside building blocks for post listings:
- Key schema for paginated listings and their invalidation patterns
- CacheStore backends: Redis, and in-process memory for development
- Pattern invalidation used after post writes
- TTL-based expiration bounding staleness
"""

from scribe.cache.factory import create_cache_keys, create_cache_store
from scribe.cache.invalidation import CacheInvalidator
from scribe.cache.keys import CacheKeys, ListingScope
from scribe.cache.memory import InMemoryCacheStore
from scribe.cache.redis import RedisCacheStore, create_redis_client
from scribe.cache.store import CacheStore

__all__ = [
    "CacheKeys",
    "ListingScope",
    "CacheStore",
    "RedisCacheStore",
    "InMemoryCacheStore",
    "create_redis_client",
    "create_cache_store",
    "create_cache_keys",
    "CacheInvalidator",
]
