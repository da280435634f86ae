"""JWT token domain service (session issuer)."""

from datetime import timedelta

import jwt
import logfire

from libre.config import AuthSettings
from libre.domain.error import InfrastructureError
from libre.domain.model.user import User
from libre.domain.value import SessionCredential
from libre.util.jwt import TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for JWT token operations."""

    span_prefix = "jwt_service"

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    @property
    def session_ttl(self) -> timedelta:
        return timedelta(minutes=self.auth_settings.session_ttl_minutes)

    def issue(self, user: User, ttl: timedelta) -> SessionCredential:
        """Issue a signed session credential for a user.

        Args:
            user: Local account
            ttl: Validity window

        Returns:
            Session credential

        Raises:
            InfrastructureError: If signing is unavailable
        """
        with self._span("issue", user_id=str(user.id)):
            try:
                token, expires_at = create_token(
                    str(user.id), user.login, ttl, self.auth_settings
                )
            except (jwt.PyJWTError, NotImplementedError) as e:
                logfire.error("JWT signing failed", error=str(e))
                raise InfrastructureError(f"Session signing unavailable: {e}") from e

            logfire.info("JWT token created", user_id=str(user.id), login=user.login)
            return SessionCredential(token=token, expires_at=expires_at)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with self._span("verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", user_id=payload.user_id)
                return payload
            except Exception as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise
