"""FastAPI security dependencies for Scribe.

Provides injectable dependencies for authentication and authorization:
- get_credential_service: Token verifier bound to the request's session
- get_current_user: Resolve the bearer token to a user (401 otherwise)
- require_roles: Require one of the given roles (403 otherwise)

Usage:
    @router.patch("/{post_id}")
    async def edit_post(user: User = Depends(require_roles(Role.AUTHOR, Role.ADMIN))):
        ...
"""

from __future__ import annotations

from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from scribe.config import settings
from scribe.core.errors import InvalidCredentials
from scribe.core.models import Role, User
from scribe.observability.logging import user_id_var
from scribe.persistence.db import get_session
from scribe.persistence.repositories import UserRepository
from scribe.security.credentials import CredentialService, JwtCredentialService


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_credential_service(
    session: AsyncSession = Depends(get_session),
) -> CredentialService:
    """Get the token verifier for this request."""
    if not settings.access_token_secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication is not configured",
        )
    return JwtCredentialService(
        settings.access_token_secret,
        UserRepository(session),
        algorithm=settings.access_token_algorithm,
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[CredentialService, Depends(get_credential_service)],
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Extract and verify the user from the Authorization header.

    Raises 401 if the header is missing, malformed or the token is invalid.
    """
    if authorization is None:
        raise _unauthorized("Authentication required")

    if not authorization.startswith("Bearer "):
        raise _unauthorized("Invalid authorization header format")

    token = authorization[7:]  # Remove "Bearer " prefix

    try:
        user = await credentials.authenticate(token)
    except InvalidCredentials as e:
        raise _unauthorized(str(e))

    request.state.user = user
    user_id_var.set(user.id)
    return user


def require_roles(*roles: Role) -> Callable[[User], Awaitable[User]]:
    """Create a dependency that requires one of `roles`.

    Usage:
        @router.delete("/{post_id}")
        async def delete_post(user: User = Depends(require_roles(Role.AUTHOR, Role.ADMIN))):
            ...
    """
    allowed = frozenset(roles)

    async def _require_roles(
        user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role '{user.role.value}' is not permitted to perform this action",
            )
        return user

    return _require_roles
