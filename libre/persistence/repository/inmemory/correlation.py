"""In-memory correlation store for testing and single-process development."""

import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from libre.domain.repository.correlation import CorrelationStore


@dataclass
class _Entry:
    verifier: str
    expires_at: float

    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at


class InMemoryCorrelationStore(CorrelationStore):
    """Correlation store kept in a dict.

    ``take_once`` has no await between lookup and removal, so it is atomic
    on a single event loop.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}

    async def put(self, state: str, verifier: str, ttl: timedelta) -> None:
        self._entries[state] = _Entry(
            verifier=verifier, expires_at=time.monotonic() + ttl.total_seconds()
        )

    async def take_once(self, state: str) -> Optional[str]:
        entry = self._entries.pop(state, None)
        if entry is None or entry.expired():
            return None
        return entry.verifier

    def __contains__(self, state: str) -> bool:
        entry = self._entries.get(state)
        return entry is not None and not entry.expired()

    def __len__(self) -> int:
        self._clean_expired()
        return len(self._entries)

    def _clean_expired(self) -> None:
        expired = [s for s, e in self._entries.items() if e.expired()]
        for s in expired:
            del self._entries[s]
