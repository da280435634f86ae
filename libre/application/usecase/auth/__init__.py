"""Authentication use cases."""

from .begin_login import BeginLoginUseCase
from .get_current_user import GetCurrentUserUseCase
from .login import LoginUseCase

__all__ = ["BeginLoginUseCase", "LoginUseCase", "GetCurrentUserUseCase"]
