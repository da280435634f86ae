"""In-memory user repository for testing."""

from typing import Optional

from libre.domain.error import DuplicateAccountError
from libre.domain.model.user import User
from libre.domain.repository.user import UserRepository
from libre.domain.value import AuthProvider, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Enforces the same per-provider uniqueness as the database.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_provider_subject(
        self, provider: AuthProvider, subject: str
    ) -> Optional[User]:
        """Find a user by provider subject."""
        for user in self._users.values():
            if user.provider_subject(provider) == subject:
                return user
        return None

    async def create(self, user: User) -> User:
        """Insert a user, rejecting an already linked provider subject."""
        for provider in AuthProvider:
            subject = user.provider_subject(provider)
            if subject is None:
                continue
            for existing in self._users.values():
                if existing.provider_subject(provider) == subject:
                    raise DuplicateAccountError(provider.value, subject)
        self._users[user.id] = user
        return user

    def __len__(self) -> int:
        return len(self._users)
