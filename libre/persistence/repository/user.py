"""PostgreSQL implementation of User repository."""

from typing import Optional

import logfire
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from libre.domain.error import DuplicateAccountError, InfrastructureError
from libre.domain.model import User
from libre.domain.repository import UserRepository
from libre.domain.value import AuthProvider, UserId
from libre.persistence.mappers import row_to_user, user_to_dict
from libre.persistence.tables import PROVIDER_COLUMNS, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, stmt) -> Optional[User]:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error("User lookup failed", error=str(e))
            raise InfrastructureError(f"User lookup failed: {e}") from e
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        return await self._find_one(stmt)

    async def find_by_provider_subject(
        self, provider: AuthProvider, subject: str
    ) -> Optional[User]:
        """Find a user by the subject column of a provider.

        Args:
            provider: The authentication provider
            subject: The provider's subject identifier

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(PROVIDER_COLUMNS[provider] == subject)
        return await self._find_one(stmt)

    async def create(self, user: User) -> User:
        """Insert a new user.

        The insert runs in a SAVEPOINT so a uniqueness violation leaves the
        request transaction usable for the follow-up read. The new account is
        committed before this returns, ahead of any session being issued.

        Args:
            user: User to insert

        Returns:
            Inserted user

        Raises:
            DuplicateAccountError: If a provider subject is already linked
            InfrastructureError: If the database is unavailable or the commit
                fails
        """
        stmt = users_table.insert().values(**user_to_dict(user))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError as e:
            provider, subject = _linked_subject(user)
            raise DuplicateAccountError(provider, subject) from e
        except SQLAlchemyError as e:
            logfire.error("User insert failed", error=str(e))
            raise InfrastructureError(f"User insert failed: {e}") from e
        return user


def _linked_subject(user: User) -> tuple[str, str]:
    for provider in AuthProvider:
        subject = user.provider_subject(provider)
        if subject:
            return provider.value, subject
    return "unknown", str(user.id)
