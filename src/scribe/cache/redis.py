"""Redis cache store for Scribe.

Provides async Redis operations for caching serialized listing pages.
Uses the redis-py async client for connection pooling. Socket timeouts
bound every call so a slow Redis degrades to a cache miss instead of
stalling the request.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, cast

import redis.asyncio as redis
from redis.exceptions import RedisError

from scribe.cache.store import CacheStore
from scribe.config import settings
from scribe.core.errors import CacheUnavailable

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


def create_redis_client(url: str | None = None) -> Redis:
    """Create a pooled Redis client from settings."""
    return redis.from_url(  # type: ignore[no-untyped-call]
        url or settings.redis_url,
        decode_responses=False,  # Values are orjson bytes
        socket_timeout=settings.cache_socket_timeout,
        socket_connect_timeout=settings.cache_connect_timeout,
    )


class RedisCacheStore(CacheStore):
    """CacheStore backed by Redis.

    Pattern matching uses SCAN MATCH so large keyspaces are never blocked
    the way KEYS would block them.
    """

    def __init__(self, client: Redis, scan_count: int = 100):
        self.client = client
        self.scan_count = scan_count

    async def get(self, key: str) -> bytes | None:
        try:
            return cast(bytes | None, await self.client.get(key))
        except RedisError as e:
            raise CacheUnavailable(f"Redis GET {key} failed: {e}") from e

    async def set_with_ttl(self, key: str, value: bytes, ttl_seconds: int) -> None:
        try:
            await self.client.setex(key, ttl_seconds, value)
        except RedisError as e:
            raise CacheUnavailable(f"Redis SETEX {key} failed: {e}") from e

    async def keys_matching(self, pattern: str) -> list[str]:
        keys: list[str] = []
        try:
            async for key in self.client.scan_iter(match=pattern, count=self.scan_count):
                keys.append(key.decode() if isinstance(key, bytes) else key)
        except RedisError as e:
            raise CacheUnavailable(f"Redis SCAN {pattern} failed: {e}") from e
        return keys

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except RedisError as e:
            raise CacheUnavailable(f"Redis DEL {key} failed: {e}") from e

    async def health_check(self) -> bool:
        """Check Redis connectivity."""
        try:
            await cast(Awaitable[bool], self.client.ping())
            return True
        except RedisError:
            return False

    async def close(self) -> None:
        """Close Redis connections."""
        await self.client.aclose()
