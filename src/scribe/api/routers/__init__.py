"""API routers for Scribe."""

from scribe.api.routers import health, posts

__all__ = ["health", "posts"]
