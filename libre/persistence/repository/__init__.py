"""PostgreSQL repository implementations."""

from libre.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
]
