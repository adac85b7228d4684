"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .remote import RemoteProvider
from .storage import StorageProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .remote import ProdRemoteProvider  # noqa: F401
from .storage import ProdStorageProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdRemoteProvider",
    "ProdStorageProvider",
    "RemoteProvider",
    "StorageProvider",
]
