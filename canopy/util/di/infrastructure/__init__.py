"""Mockable infrastructure components.

The production subclasses are imported here so that each component base
already knows its implementations when ``PROVIDERS`` is resolved.
"""

from .notifications import NotificationProvider, ProdNotificationProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "NotificationProvider",
    "PersistenceProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
