"""Entity models: identified records with open property bags and optional tags.

Usage:
    entity = Entity("devObj1", {"position": {"x": 5, "y": 5}, "color": "blue"})
    entity = Entity.from_record({"id": "devObj1", "color": "blue"})
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class RelationTag:
    """Link annotation shared by a set of entities ("entanglement").

    When active, ``linked_ids`` holds every participant id, including the
    owner's own id.
    """

    active: bool = False
    linked_ids: list[str] = field(default_factory=list)

    def clear(self) -> None:
        self.active = False
        self.linked_ids = []


@dataclass(slots=True)
class StateSlot:
    """Multi-valued attribute with one active index ("superposition")."""

    values: list[Any]
    index: int = 0

    @property
    def current_value(self) -> Any:
        """Value at ``index``, or None when the index is not a valid position."""
        if self.in_bounds(self.index):
            return self.values[self.index]
        return None

    def in_bounds(self, index: Any) -> bool:
        """True for an int (not bool) position inside ``values``."""
        return (
            isinstance(index, int)
            and not isinstance(index, bool)
            and 0 <= index < len(self.values)
        )


@dataclass(slots=True)
class Entity:
    """Uniquely identified, property-bearing record inside a World.

    ``properties`` is schemaless: positions, colors and any application field
    live there and are shallow-merged by Modify changes.
    """

    id: str
    properties: dict[str, Any] = field(default_factory=dict)
    relation: RelationTag | None = None
    state_slot: StateSlot | None = None

    @property
    def is_linked(self) -> bool:
        return self.relation is not None and self.relation.active

    @property
    def linked_ids(self) -> list[str]:
        return list(self.relation.linked_ids) if self.relation is not None else []

    @property
    def current_state(self) -> Any:
        return self.state_slot.current_value if self.state_slot is not None else None

    def merge(self, properties: Mapping[str, Any]) -> None:
        """Shallow-merge properties: overwrite given keys, keep the rest."""
        self.properties.update(properties)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Entity:
        """Build an entity from a plain ``{"id": ..., ...}`` record.

        Every key other than ``id`` becomes a property, unless the record has
        an explicit ``properties`` mapping, which is then used as-is.

        Args:
            record: Mapping with an ``id`` key.

        Returns:
            New Entity. A missing or empty id yields ``id == ""`` so that
            validation can reject it at apply time.
        """
        raw_id = record.get("id")
        entity_id = "" if raw_id is None or raw_id == "" else str(raw_id)

        explicit = record.get("properties")
        if isinstance(explicit, Mapping) and set(record) <= {"id", "properties"}:
            properties = dict(explicit)
        else:
            properties = {key: value for key, value in record.items() if key != "id"}
        return cls(id=entity_id, properties=properties)


@dataclass(frozen=True, slots=True)
class CrossingOutcome:
    """Result of a probabilistic boundary check ("tunneling")."""

    success: bool
    description: str
