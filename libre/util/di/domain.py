"""Domain layer DI providers."""

from datetime import timedelta

from dishka import Scope, provide

from libre.config import AuthSettings
from libre.domain.repository import CorrelationStore, UserRepository
from libre.domain.service import AccountService, AuthService, JWTService, OAuthClient
from libre.domain.value import AuthProvider
from libre.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self,
        oauth_clients: dict[AuthProvider, OAuthClient],
        correlation_store: CorrelationStore,
        auth_settings: AuthSettings,
    ) -> AuthService:
        """Provide authentication domain service.

        Args:
            oauth_clients: Enabled providers mapped to their OAuth clients
            correlation_store: State -> PKCE verifier store
            auth_settings: Auth settings (state lifetime)

        Returns:
            AuthService configured with the enabled OAuth clients
        """
        return AuthService(
            oauth_clients=oauth_clients,
            correlation_store=correlation_store,
            state_ttl=timedelta(seconds=auth_settings.state_ttl_seconds),
        )

    @provide
    def get_account_service(self, user_repository: UserRepository) -> AccountService:
        """Provide account domain service."""
        return AccountService(user_repository=user_repository)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)
