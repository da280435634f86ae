"""Application layer DI providers."""

from dishka import Scope, provide

from libre.application.usecase.auth import (
    BeginLoginUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
)
from libre.domain.service import AccountService, AuthService, JWTService
from libre.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_begin_login_use_case(
        self, auth_service: AuthService
    ) -> BeginLoginUseCase:
        """Provide begin login use case."""
        return BeginLoginUseCase(auth_service=auth_service)

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        account_service: AccountService,
        jwt_service: JWTService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            account_service=account_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, account_service: AccountService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            jwt_service=jwt_service, account_service=account_service
        )
