"""Pattern-based invalidation of cached listing pages.

Write operations call into this module after their database change has been
committed. Invalidation is best effort: a cache outage is logged and
reported as zero keys cleared, and the write that triggered it still
succeeds. Stale pages left behind by a failed invalidation expire with
their TTL.

Known race: a listing read that misses, fetches pre-write rows and
populates the cache after the invalidation has already run leaves a stale
page in place until it expires. Closing that window would need versioned
keys or per-key locking, which this module does not do.

Example:
    invalidator = CacheInvalidator(store, CacheKeys())
    await invalidator.invalidate_post_listings("alice")
"""

from __future__ import annotations

import logging

from scribe.cache.keys import CacheKeys
from scribe.cache.store import CacheStore
from scribe.core.errors import CacheUnavailable

logger = logging.getLogger(__name__)


class CacheInvalidator:
    """Deletes cached listing pages by glob pattern."""

    def __init__(self, store: CacheStore, keys: CacheKeys):
        self.store = store
        self.keys = keys

    async def invalidate(self, pattern: str) -> int:
        """Delete every cached key matching `pattern`.

        Safe to call when nothing matches, and idempotent.

        Returns:
            Number of keys deleted; 0 if the cache store is unavailable.
        """
        try:
            keys = await self.store.keys_matching(pattern)
            for key in keys:
                await self.store.delete(key)
        except CacheUnavailable as e:
            logger.warning(f"Cache invalidation for {pattern} skipped: {e}")
            return 0

        if keys:
            logger.info(
                f"Cleared {len(keys)} cached pages for pattern {pattern}",
                extra={"pattern": pattern, "cleared": len(keys)},
            )
        return len(keys)

    async def invalidate_post_listings(self, author_username: str) -> int:
        """Clear the global listing and one author's listing.

        Used after any post create, edit or delete by that author.
        """
        cleared = await self.invalidate(self.keys.all_posts_pattern())
        cleared += await self.invalidate(self.keys.user_posts_pattern(author_username))
        return cleared

    async def invalidate_all(self) -> int:
        """Clear every cached listing page under the key prefix."""
        return await self.invalidate(f"{self.keys.prefix}:*")
