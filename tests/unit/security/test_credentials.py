"""Tests for access token verification and security dependencies."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from jose import jwt

from scribe.core.errors import InvalidCredentials
from scribe.core.models import Role, User
from scribe.security.credentials import JwtCredentialService
from scribe.security.deps import get_current_user, require_roles

SECRET = "test-secret"
ALICE = User(id="u-alice", username="alice", role=Role.AUTHOR)


def _token(claims: dict, secret: str = SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture
def users() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.side_effect = lambda user_id: ALICE if user_id == ALICE.id else None
    return repo


@pytest.fixture
def credentials(users: AsyncMock) -> JwtCredentialService:
    return JwtCredentialService(SECRET, users)


class TestJwtCredentialService:
    @pytest.mark.asyncio
    async def test_valid_token(self, credentials: JwtCredentialService) -> None:
        user = await credentials.authenticate(_token({"id": ALICE.id}))
        assert user == ALICE

    @pytest.mark.asyncio
    async def test_wrong_signature(self, credentials: JwtCredentialService) -> None:
        with pytest.raises(InvalidCredentials):
            await credentials.authenticate(_token({"id": ALICE.id}, secret="other"))

    @pytest.mark.asyncio
    async def test_expired(self, credentials: JwtCredentialService) -> None:
        expired = datetime.now(timezone.utc) - timedelta(minutes=5)
        with pytest.raises(InvalidCredentials, match="expired"):
            await credentials.authenticate(_token({"id": ALICE.id, "exp": expired}))

    @pytest.mark.asyncio
    async def test_garbage(self, credentials: JwtCredentialService) -> None:
        with pytest.raises(InvalidCredentials):
            await credentials.authenticate("not-a-jwt")

    @pytest.mark.asyncio
    async def test_missing_id_claim(self, credentials: JwtCredentialService) -> None:
        with pytest.raises(InvalidCredentials):
            await credentials.authenticate(_token({"sub": "alice"}))

    @pytest.mark.asyncio
    async def test_unknown_user(self, credentials: JwtCredentialService) -> None:
        with pytest.raises(InvalidCredentials):
            await credentials.authenticate(_token({"id": "u-deleted"}))


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_sets_request_state(self, credentials: JwtCredentialService) -> None:
        request = MagicMock()

        user = await get_current_user(
            request, credentials, authorization=f"Bearer {_token({'id': ALICE.id})}"
        )

        assert user == ALICE
        assert request.state.user == ALICE

    @pytest.mark.asyncio
    async def test_missing_header(self, credentials: JwtCredentialService) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(MagicMock(), credentials, authorization=None)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self, credentials: JwtCredentialService) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(MagicMock(), credentials, authorization="Bearer nope")
        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}


class TestRequireRoles:
    @pytest.mark.asyncio
    async def test_allowed_role(self) -> None:
        check = require_roles(Role.AUTHOR, Role.ADMIN)
        assert await check(ALICE) == ALICE

    @pytest.mark.asyncio
    async def test_denied_role(self) -> None:
        check = require_roles(Role.ADMIN)
        with pytest.raises(HTTPException) as exc_info:
            await check(ALICE)
        assert exc_info.value.status_code == 403
