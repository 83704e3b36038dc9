"""Domain types, errors and pagination rules for Scribe."""

from scribe.core.errors import (
    CacheUnavailable,
    DataUnavailable,
    InvalidCredentials,
    PermissionDenied,
    PostNotFound,
    ScribeError,
    UserNotFound,
    ValidationFailed,
)
from scribe.core.models import PaginatedPosts, PostSummary, PostWrite, Role, User

__all__ = [
    # Errors
    "ScribeError",
    "DataUnavailable",
    "CacheUnavailable",
    "ValidationFailed",
    "PostNotFound",
    "UserNotFound",
    "PermissionDenied",
    "InvalidCredentials",
    # Models
    "Role",
    "User",
    "PostSummary",
    "PaginatedPosts",
    "PostWrite",
]
