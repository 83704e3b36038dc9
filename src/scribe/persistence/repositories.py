"""Repository pattern for post and user persistence.

PostRepository is the SQLAlchemy implementation of PostGateway. Listing
queries join the author so each summary carries the author's username.

All SQLAlchemy errors are translated to DataUnavailable so callers never
depend on driver-specific exception types.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.core.errors import DataUnavailable
from scribe.core.models import PostSummary, Role, User
from scribe.persistence.gateway import PostFilter, PostGateway
from scribe.persistence.tables import PostTable, UserTable, utcnow

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Database {operation} failed: {e}")
        raise DataUnavailable(f"Database {operation} failed") from e


def _summary(post: PostTable, author_username: str) -> PostSummary:
    return PostSummary(
        id=post.id,
        title=post.title,
        content=post.content,
        author_id=post.author_id,
        author_username=author_username,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class BaseRepository:
    """Base repository holding the request's session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> None:
        """Commit the session, rolling back on failure."""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Database commit failed: {e}")
            raise DataUnavailable("Database commit failed") from e


class PostRepository(BaseRepository, PostGateway):
    """Posts stored in SQL."""

    def _with_author(self, post_filter: PostFilter) -> Select[tuple[PostTable, str]]:
        stmt = select(PostTable, UserTable.username).join(
            UserTable, PostTable.author_id == UserTable.id
        )
        if post_filter.author_username is not None:
            stmt = stmt.where(UserTable.username == post_filter.author_username)
        return stmt

    # -------------------------------------------------------------------------
    # Listing reads
    # -------------------------------------------------------------------------

    async def find_page(self, post_filter: PostFilter, skip: int, limit: int) -> list[PostSummary]:
        stmt = (
            self._with_author(post_filter)
            .order_by(PostTable.created_at.desc(), PostTable.id.desc())
            .offset(skip)
            .limit(limit)
        )
        with _translate_errors("page query"):
            result = await self.session.execute(stmt)
            return [_summary(post, username) for post, username in result.all()]

    async def count(self, post_filter: PostFilter) -> int:
        stmt = select(func.count()).select_from(PostTable)
        if post_filter.author_username is not None:
            stmt = stmt.join(UserTable, PostTable.author_id == UserTable.id).where(
                UserTable.username == post_filter.author_username
            )
        with _translate_errors("count"):
            result = await self.session.execute(stmt)
            return int(result.scalar_one())

    async def author_exists(self, username: str) -> bool:
        stmt = select(UserTable.id).where(UserTable.username == username)
        with _translate_errors("author lookup"):
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none() is not None

    # -------------------------------------------------------------------------
    # Single-post operations
    # -------------------------------------------------------------------------

    async def get(self, post_id: str) -> PostSummary | None:
        stmt = self._with_author(PostFilter()).where(PostTable.id == post_id)
        with _translate_errors("post lookup"):
            result = await self.session.execute(stmt)
            row = result.first()
        if row is None:
            return None
        post, username = row
        return _summary(post, username)

    async def create(self, author: User, title: str, content: str) -> PostSummary:
        now = utcnow()
        row = PostTable(
            title=title,
            content=content,
            author_id=author.id,
            created_at=now,
            updated_at=now,
        )
        with _translate_errors("insert"):
            self.session.add(row)
            await self.session.flush()
        return _summary(row, author.username)

    async def update(self, post_id: str, title: str, content: str) -> PostSummary | None:
        with _translate_errors("update"):
            result = await self.session.execute(
                self._with_author(PostFilter()).where(PostTable.id == post_id)
            )
            row = result.first()
            if row is None:
                return None
            post, username = row
            post.title = title
            post.content = content
            post.updated_at = utcnow()
            await self.session.flush()
        return _summary(post, username)

    async def delete(self, post_id: str) -> bool:
        with _translate_errors("delete"):
            post = await self.session.get(PostTable, post_id)
            if post is None:
                return False
            await self.session.delete(post)
            await self.session.flush()
        return True


class UserRepository(BaseRepository):
    """Users, as needed to resolve post authors and credentials."""

    async def get_by_id(self, user_id: str) -> User | None:
        with _translate_errors("user lookup"):
            row = await self.session.get(UserTable, user_id)
        return User.model_validate(row) if row is not None else None

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(UserTable).where(UserTable.username == username)
        with _translate_errors("user lookup"):
            result = await self.session.execute(stmt)
            row = result.scalar_one_or_none()
        return User.model_validate(row) if row is not None else None

    async def create(self, username: str, email: str | None = None, role: Role = Role.USER) -> User:
        row = UserTable(username=username, email=email, role=role.value)
        with _translate_errors("insert"):
            self.session.add(row)
            await self.session.flush()
        return User.model_validate(row)
