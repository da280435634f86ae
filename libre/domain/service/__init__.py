"""Domain services."""

from .account_service import AccountService
from .auth_service import AuthService, OAuthClient
from .base import Service
from .jwt_service import JWTService

__all__ = [
    "AccountService",
    "AuthService",
    "JWTService",
    "OAuthClient",
    "Service",
]
