"""Unit tests for AccountService."""

import asyncio
from typing import Optional
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from libre.domain.error import (
    DuplicateAccountError,
    InfrastructureError,
    NotFoundError,
)
from libre.domain.model import RemoteProfile, User
from libre.domain.service import AccountService
from libre.domain.value import AuthProvider, UserId
from libre.persistence.repository.inmemory import InMemoryUserRepository


class YieldingUserRepository(InMemoryUserRepository):
    """Lets concurrent callers interleave between lookup and insert."""

    async def find_by_provider_subject(
        self, provider: AuthProvider, subject: str
    ) -> Optional[User]:
        found = await super().find_by_provider_subject(provider, subject)
        await asyncio.sleep(0)
        return found


def make_profile(**overrides) -> RemoteProfile:
    values = {
        "sub": "abc123",
        "name": "Octo Cat",
        "preferred_username": "octocat",
        "picture": "https://example.com/a.png",
        "email": "octo@example.com",
    }
    values.update(overrides)
    return RemoteProfile(**values)


class TestResolveAccount:
    @pytest.mark.asyncio
    async def test_first_login_creates_account(self):
        repo = InMemoryUserRepository()
        service = AccountService(repo)

        user = await service.resolve_account(AuthProvider.GITHUB, make_profile())

        assert user.github_id == "abc123"
        assert user.casdoor_id is None
        assert user.login == "octocat"
        assert user.name == "Octo Cat"
        assert user.email == "octo@example.com"
        assert user.admin is False
        assert len(repo) == 1

    @pytest.mark.asyncio
    async def test_second_login_returns_same_account(self):
        repo = InMemoryUserRepository()
        service = AccountService(repo)

        first = await service.resolve_account(AuthProvider.GITHUB, make_profile())
        second = await service.resolve_account(
            AuthProvider.GITHUB, make_profile(name="Renamed")
        )

        assert second.id == first.id
        assert second.name == "Octo Cat"
        assert len(repo) == 1

    @pytest.mark.asyncio
    async def test_profile_without_email(self):
        service = AccountService(InMemoryUserRepository())

        user = await service.resolve_account(
            AuthProvider.GITHUB, make_profile(email=None)
        )

        assert user.email == ""

    @pytest.mark.asyncio
    async def test_name_fallbacks(self):
        service = AccountService(InMemoryUserRepository())

        user = await service.resolve_account(
            AuthProvider.CASDOOR,
            make_profile(sub="only-sub", name=None, preferred_username=None),
        )

        assert user.login == "only-sub"
        assert user.name == "only-sub"
        assert user.casdoor_id == "only-sub"

    @pytest.mark.asyncio
    async def test_display_name_used_as_login_without_username(self):
        service = AccountService(InMemoryUserRepository())

        user = await service.resolve_account(
            AuthProvider.CASDOOR, make_profile(preferred_username=None)
        )

        assert user.login == "Octo Cat"

    @pytest.mark.asyncio
    async def test_concurrent_first_logins_create_one_account(self):
        repo = YieldingUserRepository()
        service = AccountService(repo)

        first, second = await asyncio.gather(
            service.resolve_account(AuthProvider.GITHUB, make_profile()),
            service.resolve_account(AuthProvider.GITHUB, make_profile()),
        )

        assert first.id == second.id
        assert len(repo) == 1

    @pytest.mark.asyncio
    async def test_lookup_failure_never_creates(self):
        repo = AsyncMock()
        repo.find_by_provider_subject.side_effect = InfrastructureError("db down")
        service = AccountService(repo)

        with pytest.raises(InfrastructureError):
            await service.resolve_account(AuthProvider.GITHUB, make_profile())

        repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_conflict_without_readable_winner(self):
        repo = AsyncMock()
        repo.find_by_provider_subject.return_value = None
        repo.create.side_effect = DuplicateAccountError("github", "abc123")
        service = AccountService(repo)

        with pytest.raises(InfrastructureError):
            await service.resolve_account(AuthProvider.GITHUB, make_profile())


class TestGetById:
    @pytest.mark.asyncio
    async def test_missing_user(self):
        service = AccountService(InMemoryUserRepository())

        with pytest.raises(NotFoundError):
            await service.get_by_id(UserId(uuid4()))
