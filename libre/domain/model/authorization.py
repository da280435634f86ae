"""Models exchanged with the identity provider during a login."""

from pydantic import BaseModel, ConfigDict

from libre.domain.model.common import DomainModel
from libre.domain.value import AuthProvider


class AuthorizationRequest(DomainModel):
    """One pending authorization request.

    Lives only in the correlation store (provider and state -> verifier)
    between the redirect to the provider and the callback.
    """

    provider: AuthProvider
    state: str
    pkce_verifier: str
    requested_scopes: frozenset[str]


class RemoteProfile(BaseModel):
    """Identity returned by a provider's user-info endpoint.

    Only ``sub`` is trusted as a stable key; every display field may change
    between logins and may be absent depending on the granted scopes.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    sub: str
    name: str | None = None
    preferred_username: str | None = None
    picture: str | None = None
    email: str | None = None
    email_verified: bool | None = None
    iss: str | None = None
    groups: tuple[str, ...] = ()
