"""Integration tests for RedisCorrelationStore.

Run against a real Redis (settings from the environment); skipped when Redis
is not reachable.
"""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest
import pytest_asyncio
import redis.asyncio as aioredis
from redis.exceptions import RedisError

from libre.adapter.redis.correlation import state_key
from libre.domain.error import InvalidStateError
from libre.domain.repository import CorrelationStore
from libre.domain.service import AuthService
from libre.domain.service.auth_service import correlation_key
from libre.domain.value import AuthProvider
from tests.harness import create_env_fixture

# Integration test fixture
integration_env = create_env_fixture(unmock={"redis"})


@pytest_asyncio.fixture
async def redis_client(integration_env) -> aioredis.Redis:
    client = await integration_env.get(aioredis.Redis)
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        pytest.skip(f"Redis not reachable: {e}")
    return client


@pytest_asyncio.fixture
async def store(integration_env, redis_client) -> CorrelationStore:
    return await integration_env.get(CorrelationStore)


class TestRedisCorrelationStoreIntegration:
    @pytest.mark.asyncio
    async def test_round_trip_is_single_use(self, store):
        key = f"github:{uuid4().hex}"

        await store.put(key, "verifier-1", timedelta(seconds=600))

        assert await store.take_once(key) == "verifier-1"
        assert await store.take_once(key) is None

    @pytest.mark.asyncio
    async def test_entry_carries_ttl(self, store, redis_client):
        key = f"github:{uuid4().hex}"

        await store.put(key, "verifier-1", timedelta(seconds=600))

        ttl = await redis_client.ttl(state_key(key))
        assert 0 < ttl <= 600

    @pytest.mark.asyncio
    async def test_expired_entry_reads_like_consumed(self, store):
        key = f"github:{uuid4().hex}"

        await store.put(key, "verifier-1", timedelta(seconds=1))
        await asyncio.sleep(1.5)

        assert await store.take_once(key) is None

    @pytest.mark.asyncio
    async def test_concurrent_takes_yield_one_winner(self, store):
        key = f"github:{uuid4().hex}"
        await store.put(key, "verifier-1", timedelta(seconds=600))

        results = await asyncio.gather(*(store.take_once(key) for _ in range(5)))

        assert results.count("verifier-1") == 1
        assert results.count(None) == 4


class TestAuthServiceWithRedis:
    @pytest.mark.asyncio
    async def test_state_is_bound_to_issuing_provider(
        self, integration_env, redis_client
    ):
        auth_service = await integration_env.get(AuthService)
        redirect = await auth_service.begin_login(AuthProvider.CASDOOR)

        with pytest.raises(InvalidStateError):
            await auth_service.verify_callback(AuthProvider.GITHUB, redirect.state)

        assert await redis_client.exists(
            state_key(correlation_key(AuthProvider.CASDOOR, redirect.state))
        )
        assert await auth_service.verify_callback(
            AuthProvider.CASDOOR, redirect.state
        )
