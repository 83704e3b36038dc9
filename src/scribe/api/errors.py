"""Error responses for the Scribe API.

Every error body has the same shape:

    {"messages": [{"code": "...", "messageType": "Error", "text": "...", "timestamp": "..."}]}

Domain exceptions from scribe.core.errors are mapped to status codes here,
so services never deal with HTTP.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException

from scribe.core.errors import (
    DataUnavailable,
    InvalidCredentials,
    PermissionDenied,
    PostNotFound,
    ScribeError,
    UserNotFound,
    ValidationFailed,
)

logger = logging.getLogger(__name__)


class MessageType(str, Enum):
    """Type of message in error response."""

    ERROR = "Error"
    WARNING = "Warning"
    INFO = "Info"
    EXCEPTION = "Exception"


class Message(BaseModel):
    model_config = {"extra": "forbid", "populate_by_name": True}

    code: str
    message_type: MessageType = Field(alias="messageType")
    text: str
    timestamp: str | None = None


class Result(BaseModel):
    """Error response wrapper."""

    model_config = {"extra": "forbid"}

    messages: list[Message]


def error_result(
    code: str, text: str, message_type: MessageType = MessageType.ERROR
) -> Result:
    return Result(
        messages=[
            Message(
                code=code,
                messageType=message_type,
                text=text,
                timestamp=datetime.now(UTC).isoformat(),
            )
        ]
    )


# Status codes for domain errors, most specific first
_STATUS_BY_ERROR: tuple[tuple[type[ScribeError], int], ...] = (
    (ValidationFailed, 400),
    (InvalidCredentials, 401),
    (PermissionDenied, 403),
    (PostNotFound, 404),
    (UserNotFound, 404),
    (DataUnavailable, 503),
)


def status_for(exc: ScribeError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def scribe_exception_handler(request: Request, exc: ScribeError) -> JSONResponse:
    """Exception handler for domain errors."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        text = "The data store is unavailable, try again later"
        message_type = MessageType.EXCEPTION
    else:
        text = str(exc)
        message_type = MessageType.ERROR

    return JSONResponse(
        status_code=status_code,
        content=error_result(exc.code, text, message_type).model_dump(by_alias=True),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Exception handler for HTTPExceptions raised by dependencies."""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_result(_code_for_status(exc.status_code), str(exc.detail)).model_dump(
            by_alias=True
        ),
        headers=exc.headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Exception handler for unexpected errors."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_result(
            "InternalServerError",
            "An unexpected error occurred",
            MessageType.EXCEPTION,
        ).model_dump(by_alias=True),
    )


def _code_for_status(status_code: int) -> str:
    return {
        400: "BadRequest",
        401: "Unauthorized",
        403: "Forbidden",
        404: "NotFound",
        422: "ValidationFailed",
        503: "ServiceUnavailable",
    }.get(status_code, "Error")
