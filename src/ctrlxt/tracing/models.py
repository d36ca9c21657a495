"""Data models for world event tracing.

Events are plain records that can be serialized to JSON, so sinks can forward
them to any logger or store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EventKind(Enum):
    """Discrete things a World reports about itself."""

    WORLD_CREATED = "world_created"
    ENTITY_ADDED = "entity_added"
    ENTITY_REMOVED = "entity_removed"
    ENTITY_MODIFIED = "entity_modified"
    MARKER_CREATED = "marker_created"
    CHANGE_REJECTED = "change_rejected"
    TIME_STATE_CHANGED = "time_state_changed"
    TIME_STATE_REJECTED = "time_state_rejected"
    ENTITIES_LINKED = "entities_linked"
    ENTITY_UNLINKED = "entity_unlinked"
    STATES_ASSIGNED = "states_assigned"
    STATE_CHANGED = "state_changed"
    CROSSING_ATTEMPTED = "crossing_attempted"
    OPERATION_REJECTED = "operation_rejected"
    SNAPSHOT_RESTORED = "snapshot_restored"
    SNAPSHOT_FALLBACK = "snapshot_fallback"

    @property
    def is_rejection(self) -> bool:
        return self in _REJECTIONS


_REJECTIONS = frozenset(
    {
        EventKind.CHANGE_REJECTED,
        EventKind.TIME_STATE_REJECTED,
        EventKind.OPERATION_REJECTED,
        EventKind.SNAPSHOT_FALLBACK,
    }
)


@dataclass(frozen=True, slots=True)
class WorldEvent:
    """Single event published on a World's event bus.

    Attributes:
        kind: What happened.
        world: Name of the World, if it has one.
        entity_ids: Entities the event concerns, in operation order.
        data: Kind-specific details (reason, previous state, values, ...).

    Example:
        event = WorldEvent(
            kind=EventKind.ENTITY_MODIFIED,
            world="developer",
            entity_ids=("devObj1",),
            data={"properties": {"color": "red"}},
        )
    """

    kind: EventKind
    world: str | None = None
    entity_ids: tuple[str, ...] = ()
    data: dict[str, Any] = field(default_factory=dict)

    def describe(self) -> str:
        """One-line human readable summary."""
        target = ", ".join(self.entity_ids)
        parts = [self.kind.value]
        if self.world:
            parts.insert(0, f"[{self.world}]")
        if target:
            parts.append(target)
        if self.data:
            details = " ".join(f"{key}={value!r}" for key, value in self.data.items())
            parts.append(details)
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "kind": self.kind.value,
            "world": self.world,
            "entity_ids": list(self.entity_ids),
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorldEvent:
        return cls(
            kind=EventKind(data["kind"]),
            world=data.get("world"),
            entity_ids=tuple(data.get("entity_ids", ())),
            data=data.get("data", {}),
        )
