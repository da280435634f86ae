"""Redis infrastructure providers (OAuth correlation state)."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import redis.asyncio as aioredis

from libre.adapter.redis import RedisCorrelationStore
from libre.config import Settings
from libre.domain.repository import CorrelationStore
from libre.util.di.base import ProviderBase


class RedisProvider(ProviderBase):
    """Redis component base."""

    __mock_component__ = "redis"


class ProdRedisProvider(RedisProvider):
    """Production Redis provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_redis_client(
        self, settings: Settings
    ) -> AsyncIterator[aioredis.Redis]:
        """Provide a pooled Redis client, closed when the container closes."""
        client = aioredis.from_url(settings.redis.url, decode_responses=True)
        yield client
        await client.aclose()

    @provide(scope=Scope.APP)
    def get_correlation_store(self, redis_client: aioredis.Redis) -> CorrelationStore:
        """Provide Redis-backed correlation store."""
        return RedisCorrelationStore(redis_client)
