"""Cache key schema for post listings.

Key format:
    {prefix}:page:{n}                     all posts
    {prefix}:user:{username}:page:{n}     posts by one author

Where:
- prefix: "posts" by default (settings.cache_key_prefix)
- n: 1-indexed page number
- a ":size:{s}" suffix is added when the page size differs from the default

Invalidation patterns are glob-style and cover every page (and size) of a scope.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ListingScope:
    """The dimension of a listing query: all posts, or posts by one author."""

    author_username: str | None = None

    @classmethod
    def all_posts(cls) -> "ListingScope":
        return cls()

    @classmethod
    def for_user(cls, username: str) -> "ListingScope":
        return cls(author_username=username)

    @property
    def segment(self) -> str:
        """Scope part of the cache key, empty for the global listing."""
        if self.author_username is None:
            return ""
        return f"user:{self.author_username}"

    def __str__(self) -> str:
        return self.segment or "all"


class CacheKeys:
    """Cache key generator for paginated listings."""

    def __init__(self, prefix: str = "posts", default_page_size: int = 10):
        self.prefix = prefix
        self.default_page_size = default_page_size

    def _scope_prefix(self, scope: ListingScope) -> str:
        if scope.segment:
            return f"{self.prefix}:{scope.segment}"
        return self.prefix

    def page(self, scope: ListingScope, page: int, page_size: int | None = None) -> str:
        """Key for one page of a listing."""
        key = f"{self._scope_prefix(scope)}:page:{page}"
        if page_size is not None and page_size != self.default_page_size:
            key = f"{key}:size:{page_size}"
        return key

    def all_posts_page(self, page: int) -> str:
        return self.page(ListingScope.all_posts(), page)

    def user_posts_page(self, username: str, page: int) -> str:
        return self.page(ListingScope.for_user(username), page)

    def all_posts_pattern(self) -> str:
        """Pattern matching every page of the global listing."""
        return f"{self.prefix}:page:*"

    def user_posts_pattern(self, username: str) -> str:
        """Pattern matching every page of one author's listing."""
        return f"{self.prefix}:user:{username}:*"

    def invalidation_pattern(self, scope: ListingScope) -> str:
        if scope.author_username is None:
            return self.all_posts_pattern()
        return self.user_posts_pattern(scope.author_username)

    def parse_key(self, key: str) -> dict[str, str] | None:
        """Parse a listing key into its components.

        Returns None if the key doesn't match the expected format.
        """
        parts = key.split(":")
        if len(parts) < 3 or parts[0] != self.prefix:
            return None

        if parts[1] == "page":
            rest = parts[3:]
            result = {"prefix": parts[0], "scope": "all", "page": parts[2]}
        elif parts[1] == "user" and len(parts) >= 5 and parts[3] == "page":
            rest = parts[5:]
            result = {"prefix": parts[0], "scope": f"user:{parts[2]}", "page": parts[4]}
        else:
            return None

        if rest:
            if len(rest) != 2 or rest[0] != "size":
                return None
            result["page_size"] = rest[1]
        return result
