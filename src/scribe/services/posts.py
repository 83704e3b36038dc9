"""Post write operations with listing cache invalidation.

Each mutation follows the same order:
1. Validate input and check the acting user's permission
2. Apply the change through the gateway and commit it
3. Invalidate the global listing and the post author's listing

Invalidation runs only after a successful commit, so a failed write never
purges the cache, and a cache outage never fails a committed write.
Edits invalidate even though they do not change listing membership;
over-invalidation only costs a refetch.
"""

from __future__ import annotations

import logging

from scribe.cache.invalidation import CacheInvalidator
from scribe.core.errors import PermissionDenied, PostNotFound
from scribe.core.models import PostSummary, User
from scribe.core.validation import clean_post_fields
from scribe.persistence.gateway import PostGateway

logger = logging.getLogger(__name__)


class PostService:
    """Create, edit and delete posts."""

    def __init__(
        self,
        gateway: PostGateway,
        invalidator: CacheInvalidator,
        max_title_length: int = 100,
        max_content_length: int = 5000,
    ):
        self.gateway = gateway
        self.invalidator = invalidator
        self.max_title_length = max_title_length
        self.max_content_length = max_content_length

    async def create_post(self, actor: User, title: object, content: object) -> PostSummary:
        title, content = clean_post_fields(
            title, content, self.max_title_length, self.max_content_length
        )

        logger.info(f"Post creation attempt by the user: {actor.id}")
        post = await self.gateway.create(actor, title, content)
        await self.gateway.commit()

        await self.invalidator.invalidate_post_listings(post.author_username)
        return post

    async def edit_post(
        self, actor: User, post_id: str, title: object, content: object
    ) -> PostSummary:
        """Replace a post's title and content. Only the author may edit."""
        title, content = clean_post_fields(
            title, content, self.max_title_length, self.max_content_length
        )

        existing = await self.gateway.get(post_id)
        if existing is None:
            logger.warning(f"Edit failed: Post with id {post_id} not found.")
            raise PostNotFound(post_id)

        if existing.author_id != actor.id:
            logger.warning(f"User {actor.id} attempted to edit post {post_id} without permission.")
            raise PermissionDenied(
                f"The user {actor.username} does not have the permissions to edit this post."
            )

        post = await self.gateway.update(post_id, title, content)
        if post is None:
            raise PostNotFound(post_id)
        await self.gateway.commit()

        await self.invalidator.invalidate_post_listings(post.author_username)
        return post

    async def delete_post(self, actor: User, post_id: str) -> None:
        """Delete a post. The author or an admin may delete."""
        existing = await self.gateway.get(post_id)
        if existing is None:
            logger.warning(f"Delete failed: Post with id {post_id} not found.")
            raise PostNotFound(post_id)

        if existing.author_id != actor.id and not actor.is_admin:
            logger.warning(
                f"User {actor.id} attempted to delete post {post_id} without permission."
            )
            raise PermissionDenied(
                f"The user {actor.username} does not have the permissions to delete this post."
            )

        if not await self.gateway.delete(post_id):
            raise PostNotFound(post_id)
        await self.gateway.commit()

        # The owner's listing changed, not the admin's
        await self.invalidator.invalidate_post_listings(existing.author_username)
