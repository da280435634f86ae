"""Strongly typed identifiers for libre-user domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
