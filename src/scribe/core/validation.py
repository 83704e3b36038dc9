"""Input validation for usernames and post bodies."""

from __future__ import annotations

import re

from scribe.core.errors import ValidationFailed

# Usernames never contain glob metacharacters, so they are safe in cache key patterns
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,20}$")

# Compared case-insensitively
RESTRICTED_USERNAMES = frozenset(
    {
        "admin",
        "administrator",
        "anonymous",
        "moderator",
        "null",
        "support",
        "superuser",
        "system",
        "undefined",
    }
)


def is_valid_username(username: object) -> bool:
    return (
        isinstance(username, str)
        and USERNAME_PATTERN.fullmatch(username) is not None
        and username.lower() not in RESTRICTED_USERNAMES
    )


def validate_username(username: object) -> str:
    """Return the username or raise ValidationFailed."""
    if not username:
        raise ValidationFailed("Username must be provided.", code="UsernameRequired")
    if not is_valid_username(username):
        raise ValidationFailed("Invalid username format.", code="InvalidUsernameFormat")
    return str(username)


def clean_post_fields(
    title: object,
    content: object,
    max_title_length: int,
    max_content_length: int,
) -> tuple[str, str]:
    """Trim and check a post title and content.

    Returns:
        Tuple of (title, content) with surrounding whitespace removed.

    Raises:
        ValidationFailed: On non-string, empty or over-long input.
    """
    if not isinstance(title, str) or not isinstance(content, str):
        raise ValidationFailed("Title and content must be strings.", code="InvalidInputType")

    title = title.strip()
    content = content.strip()

    if not title or not content:
        raise ValidationFailed(
            "Title and content must not be empty.", code="EmptyTitleOrContent"
        )
    if len(title) > max_title_length:
        raise ValidationFailed(
            f"Title must be under {max_title_length} characters.", code="TitleTooLong"
        )
    if len(content) > max_content_length:
        raise ValidationFailed(
            f"Content must be under {max_content_length} characters.", code="ContentTooLong"
        )
    return title, content
