"""Persistence gateway interface for posts.

The cache-aside listing service and the post write service depend on this
interface only. Implementations raise DataUnavailable for any storage
failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from scribe.core.models import PostSummary, User


@dataclass(frozen=True)
class PostFilter:
    """Criteria for listing queries. No author means all posts."""

    author_username: str | None = None


class PostGateway(ABC):
    """Abstract post store."""

    # -------------------------------------------------------------------------
    # Listing reads
    # -------------------------------------------------------------------------

    @abstractmethod
    async def find_page(self, post_filter: PostFilter, skip: int, limit: int) -> list[PostSummary]:
        """Return up to `limit` posts after skipping `skip`, newest first.

        Ordering is created_at descending, ties broken by id descending.
        """
        ...

    @abstractmethod
    async def count(self, post_filter: PostFilter) -> int:
        """Count posts matching the filter."""
        ...

    @abstractmethod
    async def author_exists(self, username: str) -> bool:
        ...

    # -------------------------------------------------------------------------
    # Single-post operations
    # -------------------------------------------------------------------------

    @abstractmethod
    async def get(self, post_id: str) -> PostSummary | None:
        ...

    @abstractmethod
    async def create(self, author: User, title: str, content: str) -> PostSummary:
        ...

    @abstractmethod
    async def update(self, post_id: str, title: str, content: str) -> PostSummary | None:
        """Replace title and content. Returns None if the post does not exist."""
        ...

    @abstractmethod
    async def delete(self, post_id: str) -> bool:
        """Delete a post. Returns False if it did not exist."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        """Make pending writes durable."""
        ...
