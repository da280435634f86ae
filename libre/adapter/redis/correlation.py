"""OAuth state storage in Redis.

Redis Schema:
  Key: oauth_state:{provider}:{state}
  Value: PKCE code verifier
  TTL: state TTL from settings (default 600 seconds)

Single-Use Enforcement:
  - Entry read and removed in one GETDEL
  - Subsequent callback attempts with the same state find nothing
  - Expired entries are purged by Redis and look the same as consumed ones
"""

from datetime import timedelta
from typing import Optional

import logfire
import redis.asyncio
from redis.exceptions import RedisError

from libre.domain.error import InfrastructureError
from libre.domain.repository.correlation import CorrelationStore

KEY_PREFIX = "oauth_state:"


def state_key(state: str) -> str:
    return f"{KEY_PREFIX}{state}"


class RedisCorrelationStore(CorrelationStore):
    """Correlation store backed by Redis."""

    def __init__(self, redis_client: redis.asyncio.Redis) -> None:
        """Initialize store.

        Args:
            redis_client: Redis async client (decode_responses=True)
        """
        self.redis = redis_client

    async def put(self, state: str, verifier: str, ttl: timedelta) -> None:
        try:
            await self.redis.set(state_key(state), verifier, ex=ttl)
        except RedisError as e:
            logfire.error("OAuth state write failed", error=str(e))
            raise InfrastructureError(f"Failed to record OAuth state: {e}") from e

    async def take_once(self, state: str) -> Optional[str]:
        try:
            value = await self.redis.getdel(state_key(state))
        except RedisError as e:
            logfire.error("OAuth state read failed", error=str(e))
            raise InfrastructureError(f"Failed to read OAuth state: {e}") from e

        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value
