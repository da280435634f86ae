"""Unit tests for InMemoryCorrelationStore."""

import asyncio
from datetime import timedelta

import pytest

from libre.persistence.repository.inmemory import InMemoryCorrelationStore

TTL = timedelta(seconds=600)


class TestInMemoryCorrelationStore:
    @pytest.mark.asyncio
    async def test_take_once_succeeds_exactly_once(self):
        store = InMemoryCorrelationStore()
        await store.put("state-1", "verifier-1", TTL)

        assert await store.take_once("state-1") == "verifier-1"
        assert await store.take_once("state-1") is None
        assert "state-1" not in store

    @pytest.mark.asyncio
    async def test_unknown_state(self):
        store = InMemoryCorrelationStore()

        assert await store.take_once("never-issued") is None

    @pytest.mark.asyncio
    async def test_expired_entry_is_not_returned(self):
        store = InMemoryCorrelationStore()
        await store.put("state-1", "verifier-1", timedelta(seconds=0))

        assert "state-1" not in store
        assert await store.take_once("state-1") is None
        assert await store.take_once("state-1") is None

    @pytest.mark.asyncio
    async def test_entries_are_independent(self):
        store = InMemoryCorrelationStore()
        await store.put("state-1", "verifier-1", TTL)
        await store.put("state-2", "verifier-2", TTL)

        assert await store.take_once("state-2") == "verifier-2"
        assert "state-1" in store
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_concurrent_takes_yield_one_winner(self):
        store = InMemoryCorrelationStore()
        await store.put("state-1", "verifier-1", TTL)

        results = await asyncio.gather(*(store.take_once("state-1") for _ in range(5)))

        assert results.count("verifier-1") == 1
        assert results.count(None) == 4
