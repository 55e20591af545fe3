"""Infrastructure providers."""

# Import bases
from .aws import AwsProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .aws import ProdAwsProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "AwsProvider",
    "PersistenceProvider",
    "ProdAwsProvider",
    "ProdPersistenceProvider",
]
