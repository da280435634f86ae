"""Correlation store interface (OAuth state -> PKCE verifier)."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional


class CorrelationStore(ABC):
    """Write-once, read-once store binding a callback to its login attempt.

    Entries are keyed by the CSRF state, scoped to its provider by the caller,
    and hold the PKCE verifier. There is no update operation. Expired entries
    behave exactly like consumed ones.
    """

    @abstractmethod
    async def put(self, state: str, verifier: str, ttl: timedelta) -> None:
        """Store a one-time mapping.

        Args:
            state: CSRF state sent to the provider
            verifier: PKCE verifier to hand back on callback
            ttl: How long the entry stays claimable

        Raises:
            InfrastructureError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def take_once(self, state: str) -> Optional[str]:
        """Atomically retrieve and delete an entry.

        Args:
            state: CSRF state from the callback

        Returns:
            The verifier, or None if absent, already consumed or expired

        Raises:
            InfrastructureError: If the store is unavailable
        """
        pass
