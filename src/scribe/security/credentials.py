"""Access token verification for Scribe.

Tokens are issued by the authentication service; this module only verifies
them. An access token is an HS256 JWT whose `id` claim names a user.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from scribe.core.errors import InvalidCredentials
from scribe.core.models import User
from scribe.persistence.repositories import UserRepository

logger = logging.getLogger(__name__)


class CredentialService(ABC):
    """Resolves a bearer token to a user."""

    @abstractmethod
    async def authenticate(self, token: str) -> User:
        """Return the token's user.

        Raises:
            InvalidCredentials: If the token is invalid, expired or names no user
        """
        ...


class JwtCredentialService(CredentialService):
    """Verifies signed access tokens and loads the user they name."""

    def __init__(self, secret: str, users: UserRepository, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm
        self.users = users

    async def authenticate(self, token: str) -> User:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise InvalidCredentials("Token has expired") from e
        except JWTError as e:
            raise InvalidCredentials(f"Invalid token: {e}") from e

        user_id = payload.get("id")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidCredentials("Token does not name a user")

        user = await self.users.get_by_id(user_id)
        if user is None:
            logger.warning(f"Token names unknown user {user_id}")
            raise InvalidCredentials("User no longer exists")
        return user
