"""GitHub OAuth 2.0 client implementation.

GitHub returns granted scopes as one comma-joined string and answers a bad
code with HTTP 200 and an ``error`` body; both are handled by the shared
client.
"""

from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel

from libre.adapter.oauth.client import BaseOAuth2Client
from libre.domain.error import ProviderRejectedError
from libre.domain.model.authorization import RemoteProfile
from libre.domain.service.auth_service import OAuthClient
from libre.domain.value.types import AuthProvider, TokenResult
from libre.util.pkce import generate_state

GITHUB_ISSUER = "https://github.com"


class GitHubUser(BaseModel):
    """Subset of the ``GET /user`` response we rely on."""

    id: int
    login: str
    name: str | None = None
    avatar_url: str | None = None
    email: str | None = None

    def to_profile(self) -> RemoteProfile:
        return RemoteProfile(
            sub=str(self.id),
            name=self.name,
            preferred_username=self.login,
            picture=self.avatar_url,
            email=self.email,
            iss=GITHUB_ISSUER,
        )


class GitHubOAuthClient(OAuthClient):
    """Base class for GitHub OAuth clients.

    Provides type distinction for dependency injection.
    """

    provider = AuthProvider.GITHUB


class RealGitHubOAuthClient(BaseOAuth2Client, GitHubOAuthClient):
    """GitHub OAuth 2.0 client with PKCE support."""

    provider = AuthProvider.GITHUB

    authorize_url = "https://github.com/login/oauth/authorize"
    token_url = "https://github.com/login/oauth/access_token"
    user_info_url = "https://api.github.com/user"

    def _parse_profile(self, body: dict[str, Any]) -> RemoteProfile:
        return GitHubUser.model_validate(body).to_profile()


class MockGitHubOAuthClient(GitHubOAuthClient):
    """Mock GitHub OAuth client for testing.

    Returns deterministic test data without making real API calls.

    Codes:
        "invalid": provider rejects the code
        "mac": provider issues a non-bearer token
        "no-email": profile without an email
        anything else: bearer token for subject "abc123"
    """

    SUBJECT = "abc123"

    def __init__(self) -> None:
        self.profile_requests = 0

    @property
    def scopes(self) -> frozenset[str]:
        return frozenset({"read:user", "user:email"})

    def build_authorization_url(
        self, pkce_challenge: str, scopes: frozenset[str]
    ) -> tuple[str, str]:
        state = generate_state()
        params = {
            "state": state,
            "code_challenge": pkce_challenge,
            "scope": " ".join(sorted(scopes)),
            "mock": "true",
        }
        return f"https://github.com/login/oauth/authorize?{urlencode(params)}", state

    async def exchange_code(self, code: str, pkce_verifier: str) -> TokenResult:
        if code == "invalid":
            raise ProviderRejectedError("The code passed is incorrect or expired.")
        token_type = "mac" if code == "mac" else "bearer"
        return TokenResult(
            access_token=f"mock-token-{code}",
            token_type=token_type,
            scopes=frozenset({"read:user", "user:email"}),
        )

    async def fetch_profile(self, access_token: str) -> RemoteProfile:
        self.profile_requests += 1
        email = None if access_token.endswith("no-email") else "mock@github.com"
        return RemoteProfile(
            sub=self.SUBJECT,
            name="Mock GitHub User",
            preferred_username="mockuser",
            picture="https://example.com/avatar.jpg",
            email=email,
            iss=GITHUB_ISSUER,
        )
