"""Redis adapter."""

from .correlation import RedisCorrelationStore

__all__ = ["RedisCorrelationStore"]
