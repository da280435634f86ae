"""Repository interfaces for the libre-user domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from libre.domain.repository.correlation import CorrelationStore
from libre.domain.repository.user import UserRepository

__all__ = [
    "CorrelationStore",
    "UserRepository",
]
