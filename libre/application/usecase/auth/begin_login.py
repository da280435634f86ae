"""Begin login use case."""

import logfire
from pydantic import BaseModel

from libre.application.usecase.base import BaseUseCase
from libre.domain.service import AuthService
from libre.domain.value import AuthProvider


class BeginLoginRequest(BaseModel):
    """Begin login request."""

    provider: AuthProvider


class BeginLoginResponse(BaseModel):
    """Where to redirect the browser, and the CSRF state bound to it."""

    authorization_url: str
    state: str


class BeginLoginUseCase(BaseUseCase[BeginLoginRequest, BeginLoginResponse]):
    """Use case for starting an OAuth login."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize begin login use case.

        Args:
            auth_service: Authentication domain service
        """
        self.auth_service = auth_service

    async def execute(self, request: BeginLoginRequest) -> BeginLoginResponse:
        """Create and record an authorization request.

        Raises:
            InfrastructureError: If the state could not be recorded
        """
        redirect = await self.auth_service.begin_login(request.provider)

        logfire.info("Login initiated", provider=request.provider.value)

        return BeginLoginResponse(
            authorization_url=redirect.url,
            state=redirect.state,
        )
