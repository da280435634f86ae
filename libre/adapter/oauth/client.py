"""OAuth 2.0 authorization code client with PKCE support.

Shared by every provider: builds the authorize URL, exchanges the code at the
token endpoint and reads the user-info endpoint. Failures are classified here,
where they happen, into the login error taxonomy.
"""

from typing import Any
from urllib.parse import urlencode

import httpx
import logfire
from pydantic import ValidationError

from libre.domain.error import (
    AuthenticationError,
    InfrastructureError,
    ProtocolError,
    ProviderRejectedError,
)
from libre.domain.model.authorization import RemoteProfile
from libre.domain.service.auth_service import OAuthClient
from libre.domain.value.common import ValueObject
from libre.domain.value.types import TokenResult
from libre.util.pkce import generate_state


class OAuthClientConfig(ValueObject):
    """Provider client configuration, built once at startup."""

    client_id: str
    client_secret: str
    redirect_uri: str
    scopes: frozenset[str]
    timeout: float = 30.0


def parse_scopes(raw: Any) -> frozenset[str]:
    """Normalize a token response ``scope`` value into a set.

    Accepts a space-delimited string, a comma-joined string (GitHub), or a
    list of either.
    """
    if not raw:
        return frozenset()
    items = raw if isinstance(raw, list) else [raw]
    scopes = set()
    for item in items:
        for part in str(item).split():
            scopes.update(s for s in part.split(",") if s)
    return frozenset(scopes)


class BaseOAuth2Client(OAuthClient):
    """OAuth 2.0 Authorization Code Flow with PKCE over httpx.

    Subclasses set the endpoint URLs and implement ``_parse_profile``.
    """

    authorize_url: str
    token_url: str
    user_info_url: str

    def __init__(
        self,
        config: OAuthClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize OAuth client.

        Args:
            config: Client credentials, redirect URI and scopes
            transport: Optional httpx transport (used by tests)
        """
        self.config = config
        self._transport = transport

    @property
    def scopes(self) -> frozenset[str]:
        return self.config.scopes

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.timeout, transport=self._transport
        )

    def build_authorization_url(
        self, pkce_challenge: str, scopes: frozenset[str]
    ) -> tuple[str, str]:
        """Build authorization URL with a freshly generated state.

        Args:
            pkce_challenge: S256 code challenge
            scopes: Scopes to request

        Returns:
            Tuple of (authorization URL, state)
        """
        state = generate_state()

        params = {
            "response_type": "code",
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "scope": " ".join(sorted(scopes)),
            "state": state,
            "code_challenge": pkce_challenge,
            "code_challenge_method": "S256",
        }

        return f"{self.authorize_url}?{urlencode(params)}", state

    async def exchange_code(self, code: str, pkce_verifier: str) -> TokenResult:
        """Exchange authorization code for access token.

        Args:
            code: Authorization code from callback
            pkce_verifier: PKCE code verifier

        Returns:
            Access token, its type and granted scopes

        Raises:
            ProviderRejectedError: Provider answered with an error body or a 4xx
            InfrastructureError: Transport failure or provider 5xx
            ProtocolError: Unparseable or incomplete token response
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
            "code_verifier": pkce_verifier,
        }

        # Use Basic Auth with client credentials
        auth = (self.config.client_id, self.config.client_secret)

        try:
            async with self._http() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    auth=auth,
                    headers={"Accept": "application/json"},
                )
        except httpx.TransportError as e:
            logfire.error(
                "Token exchange HTTP error", provider=self.provider.value, error=str(e)
            )
            raise InfrastructureError(f"HTTP error during token exchange: {e}") from e

        body = self._json_or_none(response)
        self._raise_for_provider_error(response, body, "Token exchange")

        if not isinstance(body, dict):
            raise ProtocolError("Token response is not a JSON object")

        access_token = body.get("access_token")
        token_type = body.get("token_type")
        if not isinstance(access_token, str) or not access_token:
            raise ProtocolError("Token response missing access_token")
        if not isinstance(token_type, str) or not token_type:
            raise ProtocolError("Token response missing token_type")

        return TokenResult(
            access_token=access_token,
            token_type=token_type,
            scopes=parse_scopes(body.get("scope")),
        )

    async def fetch_profile(self, access_token: str) -> RemoteProfile:
        """Get user information from the provider.

        Args:
            access_token: OAuth bearer access token

        Returns:
            Remote profile

        Raises:
            AuthenticationError: Provider refused the access token
            InfrastructureError: Transport failure or provider 5xx
            ProtocolError: Unexpected status or unparseable profile
        """
        try:
            async with self._http() as client:
                response = await client.get(
                    self.user_info_url,
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "Accept": "application/json",
                    },
                )
        except httpx.TransportError as e:
            logfire.error(
                "User info HTTP error", provider=self.provider.value, error=str(e)
            )
            raise InfrastructureError(f"HTTP error fetching user info: {e}") from e

        if response.status_code in (401, 403):
            logfire.warn(
                "User info request unauthorized",
                provider=self.provider.value,
                status_code=response.status_code,
            )
            raise AuthenticationError(
                f"User info request unauthorized: {response.status_code}"
            )
        if response.status_code >= 500:
            raise InfrastructureError(
                f"User info request failed: {response.status_code}"
            )
        if response.status_code != 200:
            logfire.error(
                "User info request failed",
                provider=self.provider.value,
                status_code=response.status_code,
            )
            raise ProtocolError(f"User info request failed: {response.status_code}")

        body = self._json_or_none(response)
        if not isinstance(body, dict):
            raise ProtocolError("User info response is not a JSON object")

        try:
            return self._parse_profile(body)
        except ValidationError as e:
            logfire.error(
                "User info response did not match the expected shape",
                provider=self.provider.value,
                error=str(e),
            )
            raise ProtocolError(f"Failed to parse user info: {e}") from e

    def _parse_profile(self, body: dict[str, Any]) -> RemoteProfile:
        """Map the provider's user-info JSON to a RemoteProfile.

        Raises:
            pydantic.ValidationError: If the body does not have the expected shape
        """
        raise NotImplementedError

    @staticmethod
    def _json_or_none(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _raise_for_provider_error(
        self, response: httpx.Response, body: Any, operation: str
    ) -> None:
        """Classify a token endpoint response that is not a success."""
        if isinstance(body, dict) and body.get("error"):
            message = str(body.get("error_description") or body["error"])
            logfire.warn(
                f"{operation} rejected by provider",
                provider=self.provider.value,
                status_code=response.status_code,
                error=str(body["error"]),
            )
            raise ProviderRejectedError(message)

        if response.status_code >= 500:
            logfire.error(
                f"{operation} failed",
                provider=self.provider.value,
                status_code=response.status_code,
            )
            raise InfrastructureError(
                f"{operation} failed: {response.status_code}"
            )

        if response.status_code >= 400:
            logfire.warn(
                f"{operation} failed",
                provider=self.provider.value,
                status_code=response.status_code,
            )
            raise ProviderRejectedError(f"{operation} failed: {response.status_code}")

        if response.status_code != 200:
            raise ProtocolError(f"{operation} returned {response.status_code}")
