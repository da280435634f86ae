"""Infrastructure providers."""

# Import bases
from .casdoor import CasdoorProvider
from .github import GitHubProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider
from .redis import RedisProvider

# Import implementations (needed for __subclasses__())
from .casdoor import ProdCasdoorProvider  # noqa: F401
from .github import ProdGitHubProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .redis import ProdRedisProvider  # noqa: F401

__all__ = [
    "CasdoorProvider",
    "GitHubProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "RedisProvider",
    "ProdCasdoorProvider",
    "ProdGitHubProvider",
    "ProdPersistenceProvider",
    "ProdRedisProvider",
]
