"""Mock providers for testing."""

from .container import build_api_test_container, build_test_container
from .persistence import MockPersistenceProvider, SharedInMemoryPersistenceProvider

__all__ = [
    "MockPersistenceProvider",
    "SharedInMemoryPersistenceProvider",
    "build_api_test_container",
    "build_test_container",
]
