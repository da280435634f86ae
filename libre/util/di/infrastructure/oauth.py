"""OAuth infrastructure provider for multi-provider authentication."""

from typing import Optional

from dishka import Scope, provide
import logfire

from libre.adapter.casdoor import CasdoorOAuthClient
from libre.adapter.github import GitHubOAuthClient
from libre.adapter.oauth import OAuthClientConfig
from libre.config import AuthSettings, Settings
from libre.domain.service.auth_service import OAuthClient
from libre.domain.value import AuthProvider
from libre.util.di.base import ProviderBase
from libre.util.error import ConfigurationError


def build_client_config(
    auth_settings: AuthSettings, provider: AuthProvider
) -> OAuthClientConfig:
    """Build the immutable client configuration for one provider.

    Raises:
        ConfigurationError: If the provider has no client id/secret pair
    """
    provider_settings = (
        auth_settings.github
        if provider == AuthProvider.GITHUB
        else auth_settings.casdoor
    )
    if not provider_settings.enabled:
        raise ConfigurationError(
            f"{provider.value} OAuth client id and secret must be configured"
        )

    return OAuthClientConfig(
        client_id=provider_settings.client_id,
        client_secret=provider_settings.client_secret,
        redirect_uri=auth_settings.callback_url(provider),
        scopes=frozenset(provider_settings.scopes),
    )


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates the enabled OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        settings: Settings,
        github_oauth_client: Optional[GitHubOAuthClient],
        casdoor_oauth_client: Optional[CasdoorOAuthClient],
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide dictionary of OAuth clients by provider.

        Disabled providers have no client and are left out.

        Args:
            settings: Application settings
            github_oauth_client: GitHub OAuth client, None when disabled
            casdoor_oauth_client: Casdoor OAuth client, None when disabled

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        candidates = {
            AuthProvider.GITHUB: github_oauth_client,
            AuthProvider.CASDOOR: casdoor_oauth_client,
        }
        clients = {
            provider: client
            for provider, client in candidates.items()
            if client is not None and provider in settings.auth.enabled_providers
        }

        logfire.info(
            "OAuth providers enabled",
            providers=[provider.value for provider in clients],
        )
        return clients
