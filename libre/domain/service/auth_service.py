"""Authentication domain service.

Drives one login attempt: initiation (state + PKCE, recorded in the
correlation store), callback verification, token exchange and profile
retrieval.
"""

from datetime import timedelta

import logfire

from libre.domain.error import (
    InvalidStateError,
    ProviderRejectedError,
    UnsupportedProviderError,
    UnsupportedTokenTypeError,
)
from libre.domain.model.authorization import AuthorizationRequest, RemoteProfile
from libre.domain.repository.correlation import CorrelationStore
from libre.domain.value.types import AuthorizationRedirect, AuthProvider, TokenResult
from libre.util.pkce import generate_pkce_pair

from .base import Service


class OAuthClient:
    """Stateless client for one identity provider's OAuth 2.0 endpoints."""

    provider: AuthProvider

    @property
    def scopes(self) -> frozenset[str]:
        """Scopes requested by default for this provider."""
        raise NotImplementedError

    def build_authorization_url(
        self, pkce_challenge: str, scopes: frozenset[str]
    ) -> tuple[str, str]:
        """Build the provider's authorize URL.

        Args:
            pkce_challenge: S256 challenge derived from the verifier
            scopes: Scopes to request

        Returns:
            Tuple of (authorization URL, freshly generated state)
        """
        raise NotImplementedError

    async def exchange_code(self, code: str, pkce_verifier: str) -> TokenResult:
        """Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the callback
            pkce_verifier: Verifier matching the challenge sent at initiation

        Returns:
            Token result
        """
        raise NotImplementedError

    async def fetch_profile(self, access_token: str) -> RemoteProfile:
        """Fetch the signed-in user's profile.

        Args:
            access_token: Bearer access token

        Returns:
            Remote profile
        """
        raise NotImplementedError


def _short(state: str) -> str:
    return state[:8] + "..."


def correlation_key(provider: AuthProvider, state: str) -> str:
    """Store key for a state, scoped to the provider that issued it."""
    return f"{provider.value}:{state}"


class AuthService(Service):
    """Domain service for the authorization code + PKCE flow."""

    span_prefix = "auth_service"

    def __init__(
        self,
        oauth_clients: dict[AuthProvider, OAuthClient],
        correlation_store: CorrelationStore,
        state_ttl: timedelta,
    ) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of enabled provider to OAuth client
            correlation_store: State -> PKCE verifier store
            state_ttl: How long an authorization request stays claimable
        """
        self.oauth_clients = oauth_clients
        self.correlation_store = correlation_store
        self.state_ttl = state_ttl

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise UnsupportedProviderError(f"Unsupported provider: {provider}")
        return client

    async def begin_login(self, provider: AuthProvider) -> AuthorizationRedirect:
        """Start a login: build the provider redirect and record its state.

        Args:
            provider: Authentication provider to use

        Returns:
            Authorization URL and the state bound to it

        Raises:
            UnsupportedProviderError: If provider is not configured
            InfrastructureError: If the state could not be recorded; no
                redirect is produced in that case
        """
        client = self._client(provider)

        with self._span("begin_login", provider=provider.value):
            verifier, challenge = generate_pkce_pair()
            url, state = client.build_authorization_url(challenge, client.scopes)

            request = AuthorizationRequest(
                provider=provider,
                state=state,
                pkce_verifier=verifier,
                requested_scopes=client.scopes,
            )

            await self.correlation_store.put(
                correlation_key(request.provider, request.state),
                request.pkce_verifier,
                self.state_ttl,
            )

            logfire.info(
                "Authorization request recorded",
                provider=provider.value,
                state=_short(request.state),
                scopes=sorted(request.requested_scopes),
                ttl_seconds=int(self.state_ttl.total_seconds()),
            )

            return AuthorizationRedirect(url=url, state=request.state)

    async def verify_callback(self, provider: AuthProvider, state: str) -> str:
        """Consume the correlation entry for a callback.

        A state only matches a callback for the provider it was issued for.

        Args:
            provider: Provider whose callback endpoint was hit
            state: State parameter from the callback

        Returns:
            PKCE verifier recorded at initiation

        Raises:
            InvalidStateError: If the state is unknown, used, expired or was
                issued for another provider
            InfrastructureError: If the store is unavailable
        """
        verifier = await self.correlation_store.take_once(
            correlation_key(provider, state)
        )
        if verifier is None:
            logfire.warn(
                "Callback state not found or already used",
                provider=provider.value,
                state=_short(state),
            )
            raise InvalidStateError("Callback state not found, used, or expired")
        return verifier

    async def reject_callback(
        self,
        provider: AuthProvider,
        state: str,
        error: str,
        error_description: str | None = None,
    ) -> None:
        """Handle a callback on which the provider reported an error.

        The state is consumed so it cannot be completed later.

        Raises:
            InvalidStateError: If the state is unknown, used or expired
            ProviderRejectedError: Always, otherwise
        """
        await self.verify_callback(provider, state)
        logfire.warn(
            "Provider reported an error on callback",
            state=_short(state),
            error=error,
        )
        raise ProviderRejectedError(error_description or error)

    async def complete_login(
        self, provider: AuthProvider, state: str, code: str
    ) -> RemoteProfile:
        """Complete a login and return the remote identity.

        Steps run strictly in order: verify callback, exchange code, check
        token type, fetch profile.

        Args:
            provider: Authentication provider used
            state: State parameter from the callback
            code: Authorization code from the callback

        Returns:
            Remote profile of the authenticated user

        Raises:
            LoginError: Classified failure of any step
        """
        client = self._client(provider)

        with self._span("complete_login", provider=provider.value):
            verifier = await self.verify_callback(provider, state)

            token = await client.exchange_code(code, verifier)

            logfire.debug(
                "Token received",
                provider=provider.value,
                token_type=token.token_type,
                scopes=sorted(token.scopes),
            )

            if not token.is_bearer:
                logfire.warn(
                    "Unsupported token type",
                    provider=provider.value,
                    token_type=token.token_type,
                )
                raise UnsupportedTokenTypeError(token.token_type)

            profile = await client.fetch_profile(token.access_token)

            logfire.info(
                "Remote profile retrieved",
                provider=provider.value,
                sub=profile.sub,
                has_email=bool(profile.email),
            )

            return profile
