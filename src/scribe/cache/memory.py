"""In-process cache store.

Suitable for single-process development (CACHE_BACKEND=memory) and
for tests. Entries expire lazily: an expired entry is dropped the next time
it is read or listed. The clock is injectable so expiry can be tested
without sleeping.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from fnmatch import fnmatchcase

from scribe.cache.store import CacheStore


@dataclass
class _Entry:
    value: bytes
    expires_at: float


class InMemoryCacheStore(CacheStore):
    """Dict-backed CacheStore with per-entry TTL."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, _Entry] = {}

    def _live(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> bytes | None:
        entry = self._live(key)
        return entry.value if entry is not None else None

    async def set_with_ttl(self, key: str, value: bytes, ttl_seconds: int) -> None:
        self._entries[key] = _Entry(value=value, expires_at=self._clock() + ttl_seconds)

    async def keys_matching(self, pattern: str) -> list[str]:
        return [
            key
            for key in list(self._entries)
            if fnmatchcase(key, pattern) and self._live(key) is not None
        ]

    async def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def __len__(self) -> int:
        return sum(1 for key in list(self._entries) if self._live(key) is not None)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._live(key) is not None
