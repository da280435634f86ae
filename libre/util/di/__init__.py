"""Dependency injection module."""

from typing import Type

from libre.util.di.application import ProdApplicationProvider
from libre.util.di.base import Component, ProviderBase
from libre.util.di.core import ProdConfigProvider
from libre.util.di.domain import ProdDomainProvider
from libre.util.di.infrastructure import (
    CasdoorProvider,
    GitHubProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    ProdCasdoorProvider,
    ProdGitHubProvider,
    ProdPersistenceProvider,
    ProdRedisProvider,
    RedisProvider,
)

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Infrastructure components (mockable)
    GitHubProvider,
    CasdoorProvider,
    PersistenceProvider,
    RedisProvider,
    # OAuth aggregator (combines the enabled OAuth clients)
    OAuthAggregatorProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get appropriate provider class.

    - No subclasses: Concrete provider, use directly
    - Has subclasses: Mockable component, select by __is_mock__ flag

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Infrastructure base classes
    "CasdoorProvider",
    "GitHubProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "RedisProvider",
    # Infrastructure implementations
    "ProdCasdoorProvider",
    "ProdGitHubProvider",
    "ProdPersistenceProvider",
    "ProdRedisProvider",
]
