"""In-memory repository implementations for testing."""

from .correlation import InMemoryCorrelationStore
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCorrelationStore",
    "InMemoryUserRepository",
]
