"""Account domain service (sign-in or sign-up)."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from libre.domain.error import DuplicateAccountError, InfrastructureError, NotFoundError
from libre.domain.model.authorization import RemoteProfile
from libre.domain.model.user import User
from libre.domain.repository.user import UserRepository
from libre.domain.value import AuthProvider, UserId

from .base import Service


def new_user_from_profile(provider: AuthProvider, profile: RemoteProfile) -> User:
    """Build a fresh local account for a remote identity.

    Login prefers the provider's preferred username, then its display name,
    then the subject. Display name prefers the provider's display name, then
    the login.
    """
    login = profile.preferred_username or profile.name or profile.sub
    linkage = {f"{provider.value}_id": profile.sub}

    return User(
        id=UserId(uuid4()),
        name=profile.name or login,
        login=login,
        avatar=profile.picture or "",
        email=profile.email or "",
        created_at=datetime.now(timezone.utc),
        admin=False,
        **linkage,
    )


class AccountService(Service):
    """Domain service mapping remote identities to local accounts."""

    span_prefix = "account_service"

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize account service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user

    async def resolve_account(
        self, provider: AuthProvider, profile: RemoteProfile
    ) -> User:
        """Return the local account for a remote identity, creating it if absent.

        Args:
            provider: Provider the profile came from
            profile: Remote profile

        Returns:
            Existing account (sign-in) or newly created one (sign-up)

        Raises:
            InfrastructureError: If storage is unavailable. A failed lookup
                never falls through to account creation.
        """
        with self._span(
            "resolve_account", provider=provider.value, sub=profile.sub
        ):
            existing = await self.user_repository.find_by_provider_subject(
                provider, profile.sub
            )
            if existing:
                logfire.info(
                    "Existing user signed in",
                    user_id=str(existing.id),
                    provider=provider.value,
                )
                return existing

            user = new_user_from_profile(provider, profile)
            try:
                created = await self.user_repository.create(user)
            except DuplicateAccountError as e:
                # Lost a concurrent sign-up race for the same identity
                logfire.warn(
                    "Concurrent sign-up detected, re-reading account",
                    provider=provider.value,
                    sub=profile.sub,
                )
                winner = await self.user_repository.find_by_provider_subject(
                    provider, profile.sub
                )
                if not winner:
                    raise InfrastructureError(
                        f"Account for {provider.value}:{profile.sub} conflicts but cannot be read"
                    ) from e
                return winner

            logfire.info(
                "New user created",
                user_id=str(created.id),
                provider=provider.value,
                sub=profile.sub,
            )
            return created
