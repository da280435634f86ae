"""Domain value objects for the sign-in flow.

Value objects are immutable and defined by their values, not identity.
"""

from datetime import datetime
from enum import Enum

from libre.domain.value.common import ValueObject


class AuthProvider(str, Enum):
    """Supported authentication providers."""

    GITHUB = "github"
    CASDOOR = "casdoor"


class AuthorizationRedirect(ValueObject):
    """Where to send the browser to start a login, and the state bound to it."""

    url: str
    state: str


class TokenResult(ValueObject):
    """Access token returned by a provider's token endpoint."""

    access_token: str
    token_type: str
    scopes: frozenset[str] = frozenset()

    @property
    def is_bearer(self) -> bool:
        return self.token_type.lower() == "bearer"


class SessionCredential(ValueObject):
    """Signed session token issued for a local account."""

    token: str
    expires_at: datetime
