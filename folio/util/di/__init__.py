"""Dependency injection module."""

from typing import Type

from folio.util.di.adapter import ProdAdapterProvider
from folio.util.di.application import ProdApplicationProvider
from folio.util.di.base import Component, ProviderBase
from folio.util.di.core import ProdConfigProvider
from folio.util.di.domain import ProdDomainProvider
from folio.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdRemoteProvider,
    ProdStorageProvider,
    RemoteProvider,
    StorageProvider,
)

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ProdAdapterProvider,
    # Infrastructure components (mockable)
    PersistenceProvider,
    StorageProvider,
    RemoteProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for a PROVIDERS entry.

    A base without subclasses is concrete and returned as is. A mockable
    base (persistence, storage, remote) has a production and a mock
    subclass, told apart by __is_mock__.

    Raises:
        ValueError: If the requested implementation is not registered
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
    "ProdAdapterProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    # Infrastructure base classes
    "PersistenceProvider",
    "RemoteProvider",
    "StorageProvider",
    # Infrastructure implementations
    "ProdPersistenceProvider",
    "ProdRemoteProvider",
    "ProdStorageProvider",
]
