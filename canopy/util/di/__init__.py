"""Dependency injection wiring.

``PROVIDERS`` lists every provider the service needs. Plain providers are
used as is; component bases (``NotificationProvider``, ``PersistenceProvider``)
are resolved to their production or mock subclass by ``get_provider``.
"""

from canopy.util.di.application import ProdApplicationProvider
from canopy.util.di.base import Component, ProviderBase
from canopy.util.di.core import ProdConfigProvider
from canopy.util.di.domain import ProdDomainProvider
from canopy.util.di.infrastructure import (
    NotificationProvider,
    PersistenceProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    NotificationProvider,
    PersistenceProvider,
]


def get_provider(
    base: type[ProviderBase], use_mock: bool = False
) -> type[ProviderBase]:
    """Provider class to instantiate for an entry of ``PROVIDERS``.

    Raises:
        ValueError: If the requested implementation does not exist
    """
    return base.implementation(use_mock=use_mock)


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
