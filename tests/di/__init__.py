"""Mock providers for testing."""

from .persistence import MockPersistenceProvider
from .remote import MockRemoteProvider
from .storage import MockStorageProvider
from .container import build_test_container

__all__ = [
    "MockPersistenceProvider",
    "MockRemoteProvider",
    "MockStorageProvider",
    "build_test_container",
]
