"""Casdoor infrastructure providers."""

from typing import Optional

from dishka import Scope, provide

from libre.adapter.casdoor import CasdoorOAuthClient, RealCasdoorOAuthClient
from libre.config import Settings
from libre.domain.value import AuthProvider
from libre.util.di.base import ProviderBase
from libre.util.di.infrastructure.oauth import build_client_config


class CasdoorProvider(ProviderBase):
    """Casdoor component base."""

    __mock_component__ = "casdoor"


class ProdCasdoorProvider(CasdoorProvider):
    """Production Casdoor provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_casdoor_oauth_client(
        self, settings: Settings
    ) -> Optional[CasdoorOAuthClient]:
        """Provide Casdoor OAuth client.

        Returns:
            Casdoor OAuth 2.0 client, or None when Casdoor login is not configured
        """
        if not settings.auth.casdoor.enabled:
            return None

        return RealCasdoorOAuthClient(
            build_client_config(settings.auth, AuthProvider.CASDOOR),
            endpoint=settings.auth.casdoor.endpoint,
        )
