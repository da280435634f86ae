"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from libre.domain.model.user import User
from libre.domain.value import AuthProvider, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.

    Lookups return None only when the row does not exist. Storage failures
    raise InfrastructureError.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_provider_subject(
        self, provider: AuthProvider, subject: str
    ) -> Optional[User]:
        """Find a user by their subject on an external provider.

        Args:
            provider: The authentication provider
            subject: The provider's stable subject identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        The account is durable once this returns.

        Args:
            user: The user to insert

        Returns:
            The inserted user

        Raises:
            DuplicateAccountError: If a provider subject is already linked
            InfrastructureError: If the account could not be stored
        """
        pass
