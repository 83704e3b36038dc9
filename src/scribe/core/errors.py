"""Domain exceptions for Scribe.

Services raise these; the API layer maps them to HTTP responses in
scribe.api.errors. CacheUnavailable never leaves the cache layer.
"""

from __future__ import annotations


class ScribeError(Exception):
    """Base class for domain errors."""

    code = "Error"


class DataUnavailable(ScribeError):
    """The database could not be reached or a query failed."""

    code = "DataUnavailable"


class CacheUnavailable(ScribeError):
    """The cache store could not be reached or an operation failed."""

    code = "CacheUnavailable"


class ValidationFailed(ScribeError):
    """Request input did not pass validation."""

    def __init__(self, text: str, code: str = "ValidationFailed"):
        super().__init__(text)
        self.code = code


class PostNotFound(ScribeError):
    code = "PostNotFound"

    def __init__(self, post_id: str):
        super().__init__(f"Post with id '{post_id}' not found")
        self.post_id = post_id


class UserNotFound(ScribeError):
    code = "UserNotFound"

    def __init__(self, username: str):
        super().__init__(f"User with username '{username}' not found")
        self.username = username


class PermissionDenied(ScribeError):
    """The acting user may not perform the operation."""

    code = "Forbidden"


class InvalidCredentials(ScribeError):
    """Raised when an access token cannot be verified."""

    code = "Unauthorized"
