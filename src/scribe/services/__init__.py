"""Post services: cached listings and cache-invalidating writes."""

from scribe.services.listing import PostListingService
from scribe.services.posts import PostService

__all__ = [
    "PostListingService",
    "PostService",
]
