"""User aggregate root.

A local account, created the first time someone signs in through one of the
configured identity providers.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from libre.domain.model.common import DomainModel
from libre.domain.value import AuthProvider, UserId


class User(DomainModel):
    """Local account with one nullable subject column per provider."""

    id: UserId
    name: str  # Display name
    login: str  # Login handle
    avatar: str = ""
    email: str = ""  # Empty when the provider did not grant email
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    admin: bool = False
    github_id: Optional[str] = None
    casdoor_id: Optional[str] = None

    def provider_subject(self, provider: AuthProvider) -> Optional[str]:
        """Subject this account is linked to on the given provider."""
        if provider == AuthProvider.GITHUB:
            return self.github_id
        return self.casdoor_id
