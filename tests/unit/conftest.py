"""Shared fixtures for unit tests.

FakePostGateway keeps posts in a list and counts listing queries, so tests
can tell cache hits from database reads.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from scribe.cache.invalidation import CacheInvalidator
from scribe.cache.keys import CacheKeys
from scribe.cache.memory import InMemoryCacheStore
from scribe.core.errors import DataUnavailable
from scribe.core.models import PostSummary, Role, User
from scribe.persistence.gateway import PostFilter, PostGateway
from scribe.services.listing import PostListingService
from scribe.services.posts import PostService

BASE_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakePostGateway(PostGateway):
    """In-memory PostGateway with call counters and failure injection."""

    def __init__(self) -> None:
        self.posts: list[PostSummary] = []
        self.users: dict[str, User] = {}
        self.find_page_calls = 0
        self.count_calls = 0
        self.commits = 0
        self.fail_with: Exception | None = None
        self.events: list[str] = []

    def add_user(self, username: str, role: Role = Role.AUTHOR) -> User:
        user = User(id=str(uuid4()), username=username, role=role)
        self.users[user.id] = user
        return user

    def seed(self, author: User, count: int) -> list[PostSummary]:
        start = len(self.posts)
        created = []
        for i in range(start, start + count):
            stamp = BASE_TIME + timedelta(minutes=i)
            post = PostSummary(
                id=f"post-{i:04d}",
                title=f"Post {i}",
                content=f"Content {i}",
                author_id=author.id,
                author_username=author.username,
                created_at=stamp,
                updated_at=stamp,
            )
            self.posts.append(post)
            created.append(post)
        return created

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _matching(self, post_filter: PostFilter) -> list[PostSummary]:
        matched = [
            p
            for p in self.posts
            if post_filter.author_username is None
            or p.author_username == post_filter.author_username
        ]
        return sorted(matched, key=lambda p: (p.created_at, p.id), reverse=True)

    async def find_page(self, post_filter: PostFilter, skip: int, limit: int) -> list[PostSummary]:
        self._check()
        self.find_page_calls += 1
        return self._matching(post_filter)[skip : skip + limit]

    async def count(self, post_filter: PostFilter) -> int:
        self._check()
        self.count_calls += 1
        return len(self._matching(post_filter))

    async def author_exists(self, username: str) -> bool:
        self._check()
        return any(u.username == username for u in self.users.values())

    async def get(self, post_id: str) -> PostSummary | None:
        self._check()
        return next((p for p in self.posts if p.id == post_id), None)

    async def create(self, author: User, title: str, content: str) -> PostSummary:
        self._check()
        stamp = BASE_TIME + timedelta(days=1, minutes=len(self.posts))
        post = PostSummary(
            id=f"post-{len(self.posts):04d}",
            title=title,
            content=content,
            author_id=author.id,
            author_username=author.username,
            created_at=stamp,
            updated_at=stamp,
        )
        self.posts.append(post)
        self.events.append("create")
        return post

    async def update(self, post_id: str, title: str, content: str) -> PostSummary | None:
        self._check()
        for index, post in enumerate(self.posts):
            if post.id == post_id:
                updated = post.model_copy(update={"title": title, "content": content})
                self.posts[index] = updated
                self.events.append("update")
                return updated
        return None

    async def delete(self, post_id: str) -> bool:
        self._check()
        before = len(self.posts)
        self.posts = [p for p in self.posts if p.id != post_id]
        deleted = len(self.posts) < before
        if deleted:
            self.events.append("delete")
        return deleted

    async def commit(self) -> None:
        self._check()
        self.commits += 1
        self.events.append("commit")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock=clock)


@pytest.fixture
def keys() -> CacheKeys:
    return CacheKeys(prefix="posts", default_page_size=10)


@pytest.fixture
def gateway() -> FakePostGateway:
    return FakePostGateway()


@pytest.fixture
def alice(gateway: FakePostGateway) -> User:
    return gateway.add_user("alice")


@pytest.fixture
def bob(gateway: FakePostGateway) -> User:
    return gateway.add_user("bob")


@pytest.fixture
def listings(
    gateway: FakePostGateway, store: InMemoryCacheStore, keys: CacheKeys
) -> PostListingService:
    return PostListingService(gateway, store, keys, page_size=10, ttl_seconds=3600)


@pytest.fixture
def invalidator(store: InMemoryCacheStore, keys: CacheKeys) -> CacheInvalidator:
    return CacheInvalidator(store, keys)


@pytest.fixture
def post_service(gateway: FakePostGateway, invalidator: CacheInvalidator) -> PostService:
    return PostService(gateway, invalidator)


@pytest.fixture
def data_unavailable() -> DataUnavailable:
    return DataUnavailable("database is down")
