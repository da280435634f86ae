"""Mock Redis providers for testing."""

from dishka import Scope, provide

from libre.domain.repository import CorrelationStore
from libre.persistence.repository.inmemory import InMemoryCorrelationStore
from libre.util.di.infrastructure.redis import RedisProvider


class MockRedisProvider(RedisProvider):
    """Mock Redis provider using an in-memory correlation store."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_correlation_store(self) -> CorrelationStore:
        """Provide in-memory correlation store."""
        return InMemoryCorrelationStore()
