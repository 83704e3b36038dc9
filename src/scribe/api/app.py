"""FastAPI application factory for Scribe.

Creates the application with:
- Post listing and post write routers
- Health endpoints
- Lifecycle management for the database and the cache store
- Domain error mapping to a uniform error body
- ORJSON for fast JSON serialization
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException
from starlette.types import ExceptionHandler

from scribe.api.errors import (
    generic_exception_handler,
    http_exception_handler,
    scribe_exception_handler,
)
from scribe.api.middleware import CorrelationMiddleware
from scribe.api.routers import health, posts
from scribe.cache.factory import create_cache_keys, create_cache_store
from scribe.cache.store import CacheStore
from scribe.config import settings
from scribe.core.errors import ScribeError
from scribe.observability import configure_logging
from scribe.persistence.db import close_db, init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    On startup: configure logging, create tables, open the cache store
    (unless one was supplied to create_app). On shutdown: close both.
    """
    configure_logging(
        json_format=settings.env != "dev",
        level=settings.log_level,
    )

    logger.info(f"Starting Scribe ({settings.env})")
    await init_db()

    owns_store = getattr(app.state, "cache_store", None) is None
    if owns_store:
        app.state.cache_store = create_cache_store()
    if not await app.state.cache_store.health_check():
        logger.warning("Cache store is unreachable; listings will be served from the database")

    logger.info("Scribe startup complete")

    yield

    logger.info("Shutting down Scribe")
    if owns_store:
        await app.state.cache_store.close()
    await close_db()
    logger.info("Scribe shutdown complete")


def create_app(cache_store: CacheStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        cache_store: Cache backend to use instead of the configured one.
            The caller keeps ownership and closes it.
    """
    app = FastAPI(
        title="Scribe",
        description="Blog posts with cached paginated listings",
        version="0.1.0",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    app.state.cache_store = cache_store
    app.state.cache_keys = create_cache_keys()

    app.add_middleware(CorrelationMiddleware)

    app.add_exception_handler(ScribeError, cast(ExceptionHandler, scribe_exception_handler))
    app.add_exception_handler(HTTPException, cast(ExceptionHandler, http_exception_handler))
    app.add_exception_handler(Exception, cast(ExceptionHandler, generic_exception_handler))

    app.include_router(health.router)
    app.include_router(posts.router)

    return app
