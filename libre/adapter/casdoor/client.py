"""Casdoor OAuth 2.0 client implementation.

Casdoor's user-info endpoint returns OIDC userinfo claims:

    {
        "sub": "...",
        "iss": "...",
        "aud": "...",
        "name": "...",
        "preferred_username": "...",
        "picture": "...",
        "email": "...",
        "email_verified": true,
        "groups": ["..."],
        "phone": "...",
        "address": "..."
    }

``email`` and ``email_verified`` are present only when the email scope was
granted; ``name``, ``preferred_username`` and ``picture`` only with profile.
"""

from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel

from libre.adapter.oauth.client import BaseOAuth2Client, OAuthClientConfig
from libre.domain.model.authorization import RemoteProfile
from libre.domain.service.auth_service import OAuthClient
from libre.domain.value.types import AuthProvider, TokenResult
from libre.util.pkce import generate_state

CASDOOR_AUTH_PATH = "/login/oauth/authorize"
CASDOOR_TOKEN_PATH = "/api/login/oauth/access_token"
CASDOOR_USER_INFO_PATH = "/api/userinfo"


class CasdoorUserInfo(BaseModel):
    """Casdoor userinfo claims."""

    sub: str
    iss: str | None = None
    name: str | None = None
    preferred_username: str | None = None
    picture: str | None = None
    email: str | None = None
    email_verified: bool | None = None
    groups: list[str] = []

    def to_profile(self) -> RemoteProfile:
        return RemoteProfile(
            sub=self.sub,
            name=self.name,
            preferred_username=self.preferred_username,
            picture=self.picture,
            email=self.email,
            email_verified=self.email_verified,
            iss=self.iss,
            groups=tuple(self.groups),
        )


class CasdoorOAuthClient(OAuthClient):
    """Base class for Casdoor OAuth clients.

    Provides type distinction for dependency injection.
    """

    provider = AuthProvider.CASDOOR


class RealCasdoorOAuthClient(BaseOAuth2Client, CasdoorOAuthClient):
    """Casdoor OAuth 2.0 client with PKCE support."""

    provider = AuthProvider.CASDOOR

    def __init__(
        self,
        config: OAuthClientConfig,
        endpoint: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Casdoor OAuth client.

        Args:
            config: Client credentials, redirect URI and scopes
            endpoint: Casdoor server base URL
            transport: Optional httpx transport (used by tests)
        """
        super().__init__(config, transport=transport)
        endpoint = endpoint.rstrip("/")
        self.authorize_url = endpoint + CASDOOR_AUTH_PATH
        self.token_url = endpoint + CASDOOR_TOKEN_PATH
        self.user_info_url = endpoint + CASDOOR_USER_INFO_PATH

    def _parse_profile(self, body: dict[str, Any]) -> RemoteProfile:
        return CasdoorUserInfo.model_validate(body).to_profile()


class MockCasdoorOAuthClient(CasdoorOAuthClient):
    """Mock Casdoor OAuth client for testing."""

    @property
    def scopes(self) -> frozenset[str]:
        return frozenset({"openid", "profile", "email"})

    def build_authorization_url(
        self, pkce_challenge: str, scopes: frozenset[str]
    ) -> tuple[str, str]:
        state = generate_state()
        params = {"state": state, "code_challenge": pkce_challenge, "mock": "true"}
        return f"https://door.casdoor.com{CASDOOR_AUTH_PATH}?{urlencode(params)}", state

    async def exchange_code(self, code: str, pkce_verifier: str) -> TokenResult:
        return TokenResult(
            access_token=f"mock-token-{code}",
            token_type="Bearer",
            scopes=frozenset({"openid", "profile", "email"}),
        )

    async def fetch_profile(self, access_token: str) -> RemoteProfile:
        return RemoteProfile(
            sub="casdoor-mock-1",
            name="Mock Casdoor User",
            preferred_username="casdoor-user",
            picture="https://example.com/casdoor.png",
            email="mock@casdoor.test",
            email_verified=True,
            iss="https://door.casdoor.com",
        )
