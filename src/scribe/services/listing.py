"""Cache-aside post listings.

Serves paginated post listings from the cache store when possible and from
the persistence gateway otherwise:

1. Compose the key from scope, page (and page size when non-default)
2. On hit, deserialize and return without touching the database
3. On miss, read the page and total count, store the result with the TTL,
   and return it

The cache is an optimization only. Any cache failure is logged and the
request is answered from the database; database failures propagate as
DataUnavailable.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from scribe.cache.invalidation import CacheInvalidator
from scribe.cache.keys import CacheKeys, ListingScope
from scribe.cache.store import CacheStore
from scribe.core.errors import CacheUnavailable, UserNotFound
from scribe.core.models import PaginatedPosts
from scribe.core.pagination import (
    normalize_page,
    normalize_page_size,
    page_offset,
    total_pages,
)
from scribe.core.validation import validate_username
from scribe.persistence.gateway import PostFilter, PostGateway

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600


class PostListingService:
    """Read-through cache in front of paginated post queries."""

    def __init__(
        self,
        gateway: PostGateway,
        store: CacheStore,
        keys: CacheKeys | None = None,
        page_size: int = 10,
        ttl_seconds: int = DEFAULT_TTL,
    ):
        self.gateway = gateway
        self.store = store
        self.keys = keys or CacheKeys(default_page_size=page_size)
        self.page_size = page_size
        self.ttl_seconds = ttl_seconds
        self.invalidator = CacheInvalidator(store, self.keys)

    async def get_page(
        self,
        scope: ListingScope,
        page: object = None,
        page_size: object = None,
    ) -> PaginatedPosts:
        """Return one page of a listing, newest posts first.

        Args:
            scope: Which listing to read
            page: 1-indexed page; missing, invalid or out-of-range values read page 1
            page_size: Items per page; missing or invalid values use the default

        Raises:
            DataUnavailable: The database could not answer a cache miss
            UserNotFound: A user-scoped miss named an unknown author
        """
        size = normalize_page_size(page_size, self.page_size)
        page_number = normalize_page(page, size)
        key = self.keys.page(scope, page_number, size)

        cached = await self._read_cached(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        logger.debug(f"Cache miss for {key}, querying database")
        result = await self._load_page(scope, page_number, size)
        await self._populate(key, result)
        return result

    async def list_posts(self, page: object = None, page_size: object = None) -> PaginatedPosts:
        """Global listing."""
        return await self.get_page(ListingScope.all_posts(), page, page_size)

    async def list_user_posts(
        self, username: object, page: object = None, page_size: object = None
    ) -> PaginatedPosts:
        """Listing of one author's posts.

        Raises:
            ValidationFailed: The username is missing or malformed
        """
        username = validate_username(username)
        return await self.get_page(ListingScope.for_user(username), page, page_size)

    async def invalidate(self, pattern: str) -> int:
        """Delete every cached page matching a glob pattern."""
        return await self.invalidator.invalidate(pattern)

    # -------------------------------------------------------------------------
    # Cache-aside steps
    # -------------------------------------------------------------------------

    async def _read_cached(self, key: str) -> PaginatedPosts | None:
        try:
            raw = await self.store.get(key)
        except CacheUnavailable as e:
            logger.warning(f"Cache read for {key} failed, reading database: {e}")
            return None

        if raw is None:
            return None

        try:
            return PaginatedPosts.from_bytes(raw)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Discarding undecodable cache entry {key}: {e}")
            return None

    async def _load_page(self, scope: ListingScope, page: int, page_size: int) -> PaginatedPosts:
        if scope.author_username is not None and not await self.gateway.author_exists(
            scope.author_username
        ):
            logger.warning(f"User not found: {scope.author_username}")
            raise UserNotFound(scope.author_username)

        post_filter = PostFilter(author_username=scope.author_username)
        # One session per request cannot run queries concurrently
        items = await self.gateway.find_page(
            post_filter, skip=page_offset(page, page_size), limit=page_size
        )
        total_count = await self.gateway.count(post_filter)

        logger.debug(f"Fetched page {page} of {scope} from database, total posts: {total_count}")
        return PaginatedPosts(
            items=items,
            page=page,
            total_pages=total_pages(total_count, page_size),
            total_count=total_count,
        )

    async def _populate(self, key: str, result: PaginatedPosts) -> None:
        try:
            await self.store.set_with_ttl(key, result.to_bytes(), self.ttl_seconds)
        except CacheUnavailable as e:
            logger.warning(f"Cache write for {key} skipped: {e}")
            return
        logger.debug(f"Cached {key} for {self.ttl_seconds}s")
