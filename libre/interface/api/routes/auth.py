"""Authentication routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from libre.application.usecase.auth import (
    BeginLoginUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
)
from libre.application.usecase.auth.begin_login import BeginLoginRequest
from libre.application.usecase.auth.get_current_user import GetCurrentUserRequest
from libre.application.usecase.auth.login import LoginRequest
from libre.config import Settings
from libre.domain.error import ClientError, NotFoundError
from libre.domain.model import User
from libre.domain.value import AuthProvider
from libre.util.jwt import JWTError

logger = logging.getLogger(__name__)

AUTH_COOKIE = "auth_token"

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Used by /auth/me to return current user if authenticated,
    or indicate unauthenticated state without raising an error.
    """

    authenticated: bool
    user: User | None = None


def build_provider_router(provider: AuthProvider) -> APIRouter:
    """Build the login and callback routes of one provider.

    Args:
        provider: Enabled authentication provider

    Returns:
        Router serving ``/auth/{provider}`` and ``/auth/{provider}/callback``
    """
    provider_router = APIRouter(
        prefix=f"/auth/{provider.value}",
        tags=["authentication"],
        route_class=DishkaRoute,
    )

    @provider_router.get("", status_code=status.HTTP_302_FOUND)
    async def begin_login(
        begin_login_use_case: FromDishka[BeginLoginUseCase],
    ) -> RedirectResponse:
        """Redirect the browser to the provider's authorization page.

        The state is also returned in the ``X-CSRF-Token`` header.

        Example:
            GET /auth/github

            302 Location: https://github.com/login/oauth/authorize?...&state=...
        """
        logger.info(f"Initiating {provider.value} login")

        result = await begin_login_use_case.execute(BeginLoginRequest(provider=provider))

        return RedirectResponse(
            url=result.authorization_url,
            status_code=status.HTTP_302_FOUND,
            headers={"X-CSRF-Token": result.state},
        )

    @provider_router.get("/callback", status_code=status.HTTP_303_SEE_OTHER)
    async def callback(
        login_use_case: FromDishka[LoginUseCase],
        settings: FromDishka[Settings],
        state: str | None = None,
        code: str | None = None,
        error: str | None = None,
        error_description: str | None = None,
    ) -> JSONResponse:
        """Handle the provider redirect and complete login.

        Returns:
            HTTP 303 to the frontend with the account and session token in
            the body and an ``auth_token`` cookie

        Example:
            GET /auth/github/callback?code=abc123&state=xyz789

            303 Location: http://localhost:3000
            {"user": {...}, "token": "...", "expires_at": "..."}
        """
        logger.info(f"OAuth callback received: provider={provider.value}")

        if not state:
            raise ClientError(
                "Callback without state", detail="Missing state parameter"
            )

        login_response = await login_use_case.execute(
            LoginRequest(
                provider=provider,
                state=state,
                code=code,
                error=error,
                error_description=error_description,
            )
        )
        logger.info(f"Login successful for user: {login_response.user.login}")

        redirect_url = settings.api.frontend_url
        response = JSONResponse(
            content=login_response.model_dump(mode="json"),
            status_code=status.HTTP_303_SEE_OTHER,
            headers={"Location": redirect_url},
        )

        # Cookies must be set on the returned response object
        is_production = settings.environment == "production"
        response.set_cookie(
            key=AUTH_COOKIE,
            value=login_response.token,
            httponly=True,
            secure=is_production,
            samesite="lax",
            path="/",
            max_age=settings.auth.session_ttl_minutes * 60,
        )

        return response

    return provider_router


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout user by clearing authentication cookie."""
    response.delete_cookie(
        key=AUTH_COOKIE,
        path="/",
        secure=settings.environment == "production",
        httponly=True,
    )
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    This endpoint is safe to call without authentication - it will return
    authenticated=false instead of raising an error.

    Examples:
        Authenticated:
        {
            "authenticated": true,
            "user": {"id": "...", "login": "octocat", ...}
        }

        Unauthenticated:
        {
            "authenticated": false,
            "user": null
        }
    """
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
        return AuthStatusResponse(authenticated=True, user=user)
    except (JWTError, NotFoundError, ValueError) as e:
        logger.info(f"Session cookie rejected: {e}")
        return AuthStatusResponse(authenticated=False)
