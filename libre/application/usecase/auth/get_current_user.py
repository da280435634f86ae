"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from libre.application.usecase.base import BaseUseCase
from libre.domain.model.user import User
from libre.domain.service import AccountService, JWTService
from libre.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserUseCase(BaseUseCase[GetCurrentUserRequest, User]):
    """Use case for getting current authenticated user."""

    def __init__(
        self, jwt_service: JWTService, account_service: AccountService
    ) -> None:
        self.jwt_service = jwt_service
        self.account_service = account_service

    async def execute(self, request: GetCurrentUserRequest) -> User:
        """Verify the session token and load its account.

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If user not found
        """
        payload = self.jwt_service.verify_token(request.token)
        return await self.account_service.get_by_id(UserId(UUID(payload.user_id)))
