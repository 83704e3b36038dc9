"""Tests for post writes and the listing invalidation they trigger."""

from unittest.mock import AsyncMock

import pytest

from scribe.cache.invalidation import CacheInvalidator
from scribe.cache.keys import CacheKeys
from scribe.cache.memory import InMemoryCacheStore
from scribe.core.errors import (
    CacheUnavailable,
    DataUnavailable,
    PermissionDenied,
    PostNotFound,
    ValidationFailed,
)
from scribe.core.models import Role, User
from scribe.services.posts import PostService


class RecordingInvalidator(CacheInvalidator):
    """Invalidator that logs calls into the gateway's event list."""

    def __init__(self, store, keys, events: list[str]):
        super().__init__(store, keys)
        self.events = events

    async def invalidate_post_listings(self, author_username: str) -> int:
        self.events.append(f"invalidate:{author_username}")
        return await super().invalidate_post_listings(author_username)


@pytest.fixture
def recording_service(gateway, store: InMemoryCacheStore, keys: CacheKeys) -> PostService:
    return PostService(gateway, RecordingInvalidator(store, keys, gateway.events))


async def _warm(store: InMemoryCacheStore, *keys: str) -> None:
    for key in keys:
        await store.set_with_ttl(key, b"cached", 3600)


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_commit_precedes_invalidation(
        self, recording_service: PostService, gateway, alice: User
    ) -> None:
        await recording_service.create_post(alice, "Title", "Body")
        assert gateway.events == ["create", "commit", "invalidate:alice"]

    @pytest.mark.asyncio
    async def test_clears_global_and_author_pages(
        self, post_service: PostService, store: InMemoryCacheStore, alice: User
    ) -> None:
        await _warm(store, "posts:page:1", "posts:page:2", "posts:user:alice:page:1", "posts:user:bob:page:1")

        await post_service.create_post(alice, "Title", "Body")

        assert await store.keys_matching("*") == ["posts:user:bob:page:1"]

    @pytest.mark.asyncio
    async def test_trims_fields(self, post_service: PostService, alice: User) -> None:
        post = await post_service.create_post(alice, "  Title  ", " Body ")
        assert post.title == "Title"
        assert post.content == "Body"
        assert post.author_username == "alice"

    @pytest.mark.asyncio
    async def test_invalid_input_touches_nothing(
        self, post_service: PostService, gateway, store: InMemoryCacheStore, alice: User
    ) -> None:
        await _warm(store, "posts:page:1")

        with pytest.raises(ValidationFailed):
            await post_service.create_post(alice, "   ", "Body")

        assert gateway.events == []
        assert "posts:page:1" in store

    @pytest.mark.asyncio
    async def test_failed_write_does_not_invalidate(
        self,
        post_service: PostService,
        gateway,
        store: InMemoryCacheStore,
        alice: User,
        data_unavailable: DataUnavailable,
    ) -> None:
        await _warm(store, "posts:page:1")
        gateway.fail_with = data_unavailable

        with pytest.raises(DataUnavailable):
            await post_service.create_post(alice, "Title", "Body")

        assert "posts:page:1" in store

    @pytest.mark.asyncio
    async def test_cache_outage_does_not_fail_write(self, gateway, keys: CacheKeys, alice: User) -> None:
        failing = AsyncMock()
        failing.keys_matching.side_effect = CacheUnavailable("redis down")
        service = PostService(gateway, CacheInvalidator(failing, keys))

        post = await service.create_post(alice, "Title", "Body")

        assert gateway.commits == 1
        assert await gateway.get(post.id) == post


class TestEditPost:
    @pytest.mark.asyncio
    async def test_author_can_edit(
        self, recording_service: PostService, gateway, alice: User
    ) -> None:
        [post] = gateway.seed(alice, 1)

        updated = await recording_service.edit_post(alice, post.id, "New", "Text")

        assert updated.title == "New"
        assert gateway.events == ["update", "commit", "invalidate:alice"]

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(
        self, post_service: PostService, gateway, alice: User, bob: User
    ) -> None:
        [post] = gateway.seed(alice, 1)

        with pytest.raises(PermissionDenied):
            await post_service.edit_post(bob, post.id, "New", "Text")
        assert gateway.commits == 0

    @pytest.mark.asyncio
    async def test_admin_cannot_edit_others_post(
        self, post_service: PostService, gateway, alice: User
    ) -> None:
        admin = gateway.add_user("root", role=Role.ADMIN)
        [post] = gateway.seed(alice, 1)

        with pytest.raises(PermissionDenied):
            await post_service.edit_post(admin, post.id, "New", "Text")

    @pytest.mark.asyncio
    async def test_missing_post(self, post_service: PostService, alice: User) -> None:
        with pytest.raises(PostNotFound):
            await post_service.edit_post(alice, "post-9999", "New", "Text")


class TestDeletePost:
    @pytest.mark.asyncio
    async def test_author_can_delete(
        self, recording_service: PostService, gateway, alice: User
    ) -> None:
        [post] = gateway.seed(alice, 1)

        await recording_service.delete_post(alice, post.id)

        assert await gateway.get(post.id) is None
        assert gateway.events == ["delete", "commit", "invalidate:alice"]

    @pytest.mark.asyncio
    async def test_admin_delete_invalidates_owner_listing(
        self, recording_service: PostService, gateway, store: InMemoryCacheStore, alice: User
    ) -> None:
        admin = gateway.add_user("root", role=Role.ADMIN)
        [post] = gateway.seed(alice, 1)
        await _warm(store, "posts:user:alice:page:1", "posts:user:root:page:1")

        await recording_service.delete_post(admin, post.id)

        assert gateway.events[-1] == "invalidate:alice"
        assert "posts:user:alice:page:1" not in store
        assert "posts:user:root:page:1" in store

    @pytest.mark.asyncio
    async def test_other_user_cannot_delete(
        self, post_service: PostService, gateway, alice: User, bob: User
    ) -> None:
        [post] = gateway.seed(alice, 1)

        with pytest.raises(PermissionDenied):
            await post_service.delete_post(bob, post.id)
        assert await gateway.get(post.id) is not None

    @pytest.mark.asyncio
    async def test_missing_post(self, post_service: PostService, alice: User) -> None:
        with pytest.raises(PostNotFound):
            await post_service.delete_post(alice, "post-9999")


class TestListingsAfterWrites:
    """Reads after a write see the change."""

    @pytest.mark.asyncio
    async def test_new_post_visible_on_next_read(
        self, listings, post_service: PostService, gateway, alice: User
    ) -> None:
        gateway.seed(alice, 25)
        before = await listings.list_posts(page=1)

        created = await post_service.create_post(alice, "Fresh", "Body")
        after = await listings.list_posts(page=1)

        assert before.total_count == 25
        assert after.total_count == 26
        assert after.items[0].id == created.id

    @pytest.mark.asyncio
    async def test_delete_visible_on_author_listing(
        self, listings, post_service: PostService, gateway, alice: User
    ) -> None:
        posts = gateway.seed(alice, 3)
        await listings.list_user_posts("alice")

        await post_service.delete_post(alice, posts[0].id)
        result = await listings.list_user_posts("alice")

        assert result.total_count == 2
