"""GitHub infrastructure providers."""

from typing import Optional

from dishka import Scope, provide

from libre.adapter.github import GitHubOAuthClient, RealGitHubOAuthClient
from libre.config import Settings
from libre.domain.value import AuthProvider
from libre.util.di.base import ProviderBase
from libre.util.di.infrastructure.oauth import build_client_config


class GitHubProvider(ProviderBase):
    """GitHub component base."""

    __mock_component__ = "github"


class ProdGitHubProvider(GitHubProvider):
    """Production GitHub provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_github_oauth_client(
        self, settings: Settings
    ) -> Optional[GitHubOAuthClient]:
        """Provide GitHub OAuth client.

        Returns:
            GitHub OAuth 2.0 client, or None when GitHub login is not configured
        """
        if not settings.auth.github.enabled:
            return None

        return RealGitHubOAuthClient(
            build_client_config(settings.auth, AuthProvider.GITHUB)
        )
