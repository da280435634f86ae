"""Domain model entities for libre-user."""

from libre.domain.model.authorization import AuthorizationRequest, RemoteProfile
from libre.domain.model.user import User

__all__ = [
    "AuthorizationRequest",
    "RemoteProfile",
    "User",
]
