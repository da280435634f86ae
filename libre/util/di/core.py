"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from libre.config import DEFAULT_JWT_SECRET, AuthSettings, Settings
from libre.util.di.base import ProviderBase
from libre.util.error import ConfigurationError


class ProdConfigProvider(ProviderBase):
    """Settings for the whole process, read once from the environment and .env."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Load settings.

        Raises:
            ConfigurationError: If production would sign sessions with the
                placeholder JWT secret
        """
        settings = Settings()
        if (
            settings.environment == "production"
            and settings.auth.jwt_secret == DEFAULT_JWT_SECRET
        ):
            raise ConfigurationError("AUTH__JWT_SECRET must be set in production")
        return settings

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth
