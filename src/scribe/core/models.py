"""Pydantic models shared by the listing cache, services and API."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

import orjson
from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """User roles, least to most privileged."""

    USER = "user"
    AUTHOR = "author"
    ADMIN = "admin"


class User(BaseModel):
    """A registered user as seen by the post services."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str | None = None
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class PostSummary(BaseModel):
    """A post as it appears in a listing page."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    content: str
    author_id: str
    author_username: str
    created_at: datetime
    updated_at: datetime


class PaginatedPosts(BaseModel):
    """One page of a post listing.

    total_pages is ceil(total_count / page_size); items never exceeds page_size.
    """

    items: list[PostSummary] = Field(default_factory=list)
    page: int
    total_pages: int
    total_count: int

    def to_bytes(self) -> bytes:
        """Serialize for the cache store."""
        return orjson.dumps(self.model_dump(mode="json"))

    @classmethod
    def from_bytes(cls, data: bytes | str) -> "PaginatedPosts":
        """Deserialize a cached page."""
        return cls.model_validate(orjson.loads(data))


class PostWrite(BaseModel):
    """Request body for creating or editing a post.

    Fields accept any JSON value so that type, emptiness and length rules are
    all enforced by PostService and reported as ValidationFailed (400).
    """

    title: Any = None
    content: Any = None
