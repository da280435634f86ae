"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    Accounts and pending authorization requests are never edited in place.
    """

    model_config = ConfigDict(frozen=True)
