"""Authentication and role checks for Scribe."""

from scribe.security.credentials import CredentialService, JwtCredentialService
from scribe.security.deps import get_credential_service, get_current_user, require_roles

__all__ = [
    "CredentialService",
    "JwtCredentialService",
    "get_credential_service",
    "get_current_user",
    "require_roles",
]
