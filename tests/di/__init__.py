"""Mock providers for testing."""

from .casdoor import MockCasdoorProvider
from .github import MockGitHubProvider
from .persistence import MockPersistenceProvider
from .redis import MockRedisProvider
from .container import build_test_container

__all__ = [
    "MockCasdoorProvider",
    "MockGitHubProvider",
    "MockPersistenceProvider",
    "MockRedisProvider",
    "build_test_container",
]
