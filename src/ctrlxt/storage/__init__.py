"""Storage backends."""

from ctrlxt.storage.local import LocalEntityStore
from ctrlxt.storage.protocol import EntityStore

__all__ = [
    "EntityStore",
    "LocalEntityStore",
]
