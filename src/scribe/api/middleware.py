"""Request correlation middleware.

Takes the request ID from `x-request-id` (or generates one), exposes it to
logging through LogContext, and echoes it in the response.
"""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from scribe.observability.logging import LogContext


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Propagates the request ID to request state, logs and response headers."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        with LogContext(request_id=request_id):
            request.state.request_id = request_id
            response = await call_next(request)
            response.headers["x-request-id"] = request_id
            return response
