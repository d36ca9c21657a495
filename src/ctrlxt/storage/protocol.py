"""Storage protocol for swappable entity containers.

The storage layer holds a World's entities, keyed by id, enabling:
- Local in-memory (default)
- Instrumented or persistent stores supplied by callers

Usage:
    store = LocalEntityStore()
    world = create_world(..., store=store)
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from ctrlxt.core.entity.models import Entity


@runtime_checkable
class EntityStore(Protocol):
    """Abstract entity container. Ids are unique; iteration follows insertion order."""

    def insert(self, entity: Entity) -> None:
        """Add an entity. Raises DuplicateError if the id is taken."""
        ...

    def get(self, entity_id: str) -> Entity | None:
        """Look up an entity by id."""
        ...

    def remove(self, entity_id: str) -> Entity | None:
        """Delete and return an entity; None if absent."""
        ...

    def __contains__(self, entity_id: object) -> bool:
        """Check if an id is present."""
        ...

    def __iter__(self) -> Iterator[Entity]:
        """Iterate entities in insertion order."""
        ...

    def __len__(self) -> int:
        """Number of stored entities."""
        ...

    def ids(self) -> list[str]:
        """Entity ids in insertion order."""
        ...
