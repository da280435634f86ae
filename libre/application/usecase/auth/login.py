"""Login use case (OAuth callback)."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from libre.application.usecase.base import BaseUseCase
from libre.domain.error import ClientError
from libre.domain.model.user import User
from libre.domain.service import AccountService, AuthService, JWTService
from libre.domain.value import AuthProvider


class LoginRequest(BaseModel):
    """Login request from OAuth callback.

    These parameters come from the OAuth provider in the callback URL.
    """

    provider: AuthProvider  # Which provider is handling this login
    state: str  # State parameter for CSRF verification
    code: str | None = None  # OAuth authorization code
    error: str | None = None  # Set when the provider refused the authorization
    error_description: str | None = None


class LoginResponse(BaseModel):
    """Login response."""

    user: User
    token: str
    expires_at: datetime


class LoginUseCase(BaseUseCase[LoginRequest, LoginResponse]):
    """Use case for completing an OAuth login."""

    def __init__(
        self,
        auth_service: AuthService,
        account_service: AccountService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Authentication domain service
            account_service: Account domain service
            jwt_service: JWT token domain service
        """
        self.auth_service = auth_service
        self.account_service = account_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute the callback half of the login flow.

        Steps:
        1. Consume the state and complete OAuth with the provider
        2. Sign in to the linked account, or sign up a new one
        3. Issue a session credential

        Args:
            request: Login request with OAuth callback parameters

        Returns:
            Login response with the account and its session token

        Raises:
            LoginError: Classified failure of any step
        """
        if request.error:
            await self.auth_service.reject_callback(
                request.provider,
                request.state,
                request.error,
                request.error_description,
            )
        if not request.code:
            raise ClientError("Callback without code", detail="Missing code parameter")

        profile = await self.auth_service.complete_login(
            request.provider, request.state, request.code
        )

        user = await self.account_service.resolve_account(request.provider, profile)

        credential = self.jwt_service.issue(user, self.jwt_service.session_ttl)

        logfire.info(
            "Login completed",
            user_id=str(user.id),
            provider=request.provider.value,
        )

        return LoginResponse(
            user=user,
            token=credential.token,
            expires_at=credential.expires_at,
        )
