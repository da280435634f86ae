"""JWT token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from libre.config import AuthSettings


class TokenPayload(BaseModel):
    """JWT token payload."""

    user_id: str
    login: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: str, login: str, ttl: timedelta, settings: AuthSettings
) -> tuple[str, datetime]:
    """Create a JWT token for the user.

    Args:
        user_id: User ID
        login: User login handle
        ttl: Token validity window
        settings: Authentication settings

    Returns:
        Encoded JWT token and its expiry
    """
    expiry = datetime.now(timezone.utc) + ttl

    payload = {
        "user_id": user_id,
        "login": login,
        "exp": expiry,
    }

    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    return token, expiry


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
