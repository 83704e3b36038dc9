"""Base cache store interface.

Defines the key-value operations the listing cache needs. Implementations
raise CacheUnavailable for any backend failure; callers decide whether a
failure matters (for listings it never does).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CacheStore(ABC):
    """Abstract base class for cache backends."""

    @abstractmethod
    async def get(self, key: str) -> bytes | None:
        """Return the stored value, or None if absent or expired."""
        ...

    @abstractmethod
    async def set_with_ttl(self, key: str, value: bytes, ttl_seconds: int) -> None:
        """Store `value` under `key`, replacing any previous value, for `ttl_seconds`."""
        ...

    @abstractmethod
    async def keys_matching(self, pattern: str) -> list[str]:
        """List live keys matching a glob-style pattern (`*`, `?`, `[...]`)."""
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete `key`. Deleting a missing key is not an error."""
        ...

    async def health_check(self) -> bool:
        """Check backend connectivity."""
        return True

    async def close(self) -> None:
        """Release backend resources."""
        return None
