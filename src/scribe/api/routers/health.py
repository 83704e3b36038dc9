"""Health check endpoints for Scribe.

- /health/live - Liveness probe (always OK while the process runs)
- /health      - Database and cache status

The cache is optional for correct listings, so a cache outage reports
"degraded" with 200; a database outage reports "unhealthy" with 503.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from scribe.api.deps import get_cache_store
from scribe.cache.store import CacheStore
from scribe.persistence.db import health_check as db_health_check

router = APIRouter(tags=["health"])

CHECK_TIMEOUT = 5.0  # seconds


class HealthStatus(str, Enum):
    """Health check status."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    """Health status of a single component."""

    name: str
    healthy: bool
    latency_ms: float
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "status": "up" if self.healthy else "down",
            "latency_ms": round(self.latency_ms, 2),
        }
        if self.message:
            result["message"] = self.message
        return result


async def _timed_check(name: str, check: Callable[[], Awaitable[bool]]) -> ComponentHealth:
    start = time.monotonic()
    try:
        healthy = await asyncio.wait_for(check(), timeout=CHECK_TIMEOUT)
        message = None if healthy else f"{name} check failed"
    except asyncio.TimeoutError:
        healthy = False
        message = f"{name} check timed out"
    return ComponentHealth(
        name=name,
        healthy=healthy,
        latency_ms=(time.monotonic() - start) * 1000,
        message=message,
    )


@router.get("/health")
async def health(store: CacheStore = Depends(get_cache_store)) -> JSONResponse:
    """Report database and cache health."""
    database, cache = await asyncio.gather(
        _timed_check("database", db_health_check),
        _timed_check("cache", store.health_check),
    )

    if not database.healthy:
        overall = HealthStatus.UNHEALTHY
    elif not cache.healthy:
        overall = HealthStatus.DEGRADED
    else:
        overall = HealthStatus.HEALTHY

    return JSONResponse(
        content={
            "status": overall.value,
            "checks": {c.name: c.to_dict() for c in (database, cache)},
        },
        status_code=503 if overall == HealthStatus.UNHEALTHY else 200,
    )


@router.get("/health/live")
async def live() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
