"""Mock providers for testing."""

from .aws import MockAwsProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockAwsProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
