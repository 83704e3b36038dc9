"""Observability for Scribe.

Structured logging with request/user correlation.
"""

from scribe.observability.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogContext,
    configure_logging,
    request_id_var,
    user_id_var,
)

__all__ = [
    "configure_logging",
    "ConsoleFormatter",
    "JsonFormatter",
    "LogContext",
    "request_id_var",
    "user_id_var",
]
