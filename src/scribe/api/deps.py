"""Shared FastAPI dependencies for Scribe routers.

The cache store is created once per process in the app lifespan and kept on
app.state; everything else is built per request around the request's
database session.
"""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.cache.invalidation import CacheInvalidator
from scribe.cache.keys import CacheKeys
from scribe.cache.store import CacheStore
from scribe.config import settings
from scribe.persistence.db import get_session
from scribe.persistence.gateway import PostGateway
from scribe.persistence.repositories import PostRepository
from scribe.services.listing import PostListingService
from scribe.services.posts import PostService


def get_cache_store(request: Request) -> CacheStore:
    """The process-wide cache store."""
    return request.app.state.cache_store  # type: ignore[no-any-return]


def get_cache_keys(request: Request) -> CacheKeys:
    return request.app.state.cache_keys  # type: ignore[no-any-return]


async def get_post_gateway(session: AsyncSession = Depends(get_session)) -> PostGateway:
    """Get Post repository instance."""
    return PostRepository(session)


def get_invalidator(
    store: CacheStore = Depends(get_cache_store),
    keys: CacheKeys = Depends(get_cache_keys),
) -> CacheInvalidator:
    return CacheInvalidator(store, keys)


def get_listing_service(
    gateway: PostGateway = Depends(get_post_gateway),
    store: CacheStore = Depends(get_cache_store),
    keys: CacheKeys = Depends(get_cache_keys),
) -> PostListingService:
    return PostListingService(
        gateway,
        store,
        keys,
        page_size=settings.page_size,
        ttl_seconds=settings.cache_ttl_seconds,
    )


def get_post_service(
    gateway: PostGateway = Depends(get_post_gateway),
    invalidator: CacheInvalidator = Depends(get_invalidator),
) -> PostService:
    return PostService(
        gateway,
        invalidator,
        max_title_length=settings.max_post_title_length,
        max_content_length=settings.max_post_content_length,
    )
