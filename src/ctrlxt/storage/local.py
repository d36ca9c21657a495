"""Local in-memory entity storage.

Dict-based, id-keyed, insertion ordered. Suitable for single-process use.

Usage:
    store = LocalEntityStore()
    store.insert(Entity("p1"))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ctrlxt.core.entity.models import Entity
from ctrlxt.core.errors import DuplicateError


class LocalEntityStore:
    """Simple in-memory store using one dict.

    Structure:
        _entities[entity_id] = entity

    Entities are stored by reference; callers mutating a returned entity
    mutate the stored one.
    """

    def __init__(self, entities: Iterable[Entity] = ()):
        """Initialize store, optionally pre-populated.

        Args:
            entities: Initial entities, inserted in order.

        Raises:
            DuplicateError: If initial entities share an id.
        """
        self._entities: dict[str, Entity] = {}
        for entity in entities:
            self.insert(entity)

    def insert(self, entity: Entity) -> None:
        """Add an entity.

        Args:
            entity: Entity to store.

        Raises:
            DuplicateError: If an entity with the same id exists.
        """
        if entity.id in self._entities:
            raise DuplicateError(f"Entity with id '{entity.id}' already exists")
        self._entities[entity.id] = entity

    def get(self, entity_id: str) -> Entity | None:
        """Look up an entity by id.

        Args:
            entity_id: Id to look up.

        Returns:
            The stored entity or None.
        """
        return self._entities.get(entity_id)

    def remove(self, entity_id: str) -> Entity | None:
        """Delete an entity.

        Args:
            entity_id: Id to delete.

        Returns:
            The removed entity, or None if nothing was stored under that id.
        """
        return self._entities.pop(entity_id, None)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def __len__(self) -> int:
        return len(self._entities)

    def ids(self) -> list[str]:
        return list(self._entities)

    def clear(self) -> None:
        self._entities.clear()
