"""Unit tests for RedisCorrelationStore."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from libre.adapter.redis import RedisCorrelationStore
from libre.adapter.redis.correlation import state_key
from libre.domain.error import InfrastructureError


@pytest.fixture
def redis_client():
    return AsyncMock()


class TestRedisCorrelationStore:
    @pytest.mark.asyncio
    async def test_put_sets_key_with_expiry(self, redis_client):
        store = RedisCorrelationStore(redis_client)

        await store.put("state-1", "verifier-1", timedelta(seconds=600))

        redis_client.set.assert_awaited_once_with(
            "oauth_state:state-1", "verifier-1", ex=timedelta(seconds=600)
        )

    @pytest.mark.asyncio
    async def test_take_once_uses_getdel(self, redis_client):
        redis_client.getdel.return_value = "verifier-1"
        store = RedisCorrelationStore(redis_client)

        assert await store.take_once("state-1") == "verifier-1"
        redis_client.getdel.assert_awaited_once_with(state_key("state-1"))

    @pytest.mark.asyncio
    async def test_take_once_missing_returns_none(self, redis_client):
        redis_client.getdel.return_value = None
        store = RedisCorrelationStore(redis_client)

        assert await store.take_once("unknown") is None

    @pytest.mark.asyncio
    async def test_take_once_decodes_bytes(self, redis_client):
        redis_client.getdel.return_value = b"verifier-1"
        store = RedisCorrelationStore(redis_client)

        assert await store.take_once("state-1") == "verifier-1"

    @pytest.mark.asyncio
    async def test_write_failure_is_infrastructure_error(self, redis_client):
        redis_client.set.side_effect = RedisConnectionError("connection refused")
        store = RedisCorrelationStore(redis_client)

        with pytest.raises(InfrastructureError) as exc_info:
            await store.put("state-1", "verifier-1", timedelta(seconds=600))

        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_read_failure_is_not_reported_as_missing(self, redis_client):
        redis_client.getdel.side_effect = RedisConnectionError("connection refused")
        store = RedisCorrelationStore(redis_client)

        with pytest.raises(InfrastructureError):
            await store.take_once("state-1")
