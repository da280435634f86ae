"""Domain value objects for libre-user."""

from libre.domain.value.identifiers import UserId
from libre.domain.value.types import (
    AuthorizationRedirect,
    AuthProvider,
    SessionCredential,
    TokenResult,
)

__all__ = [
    # Identifiers
    "UserId",
    # Types
    "AuthProvider",
    "AuthorizationRedirect",
    "SessionCredential",
    "TokenResult",
]
