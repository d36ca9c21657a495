"""World: container of entities, markers and clock state, mutated by changes.

Usage:
    world = create_world({"x": 100, "y": 100, "z": 100}, "CosmicDustEntanglement",
                         "BioQuantumEntangled", ["QuantumGPS"], name="developer")

    report = world.apply_changes([
        {"type": "add", "object": {"id": "devObj1", "color": "blue"}},
        {"type": "modify", "targetId": "devObj1", "properties": {"color": "red"}},
        {"type": "createBlinkSpot", "coordinates": {"x": 20, "y": 30, "z": 0}},
    ])

    world.set_time_state("PAUSE")
    world.link("devObj1", "devObj2")
    encoded = world.snapshot()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ctrlxt.config.settings import WorldSettings
from ctrlxt.core.change import (
    AddChange,
    Change,
    CreateMarkerChange,
    ModifyChange,
    RemoveChange,
    normalize_changes,
    parse_change,
)
from ctrlxt.core.entity import operations
from ctrlxt.core.entity.models import CrossingOutcome, Entity
from ctrlxt.core.errors import (
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
    WorldError,
)
from ctrlxt.core.reporting import emit, report
from ctrlxt.core.time import DEFAULT_SPEED, TimeState, resolve_transition
from ctrlxt.core.types import Vector3
from ctrlxt.storage.local import LocalEntityStore
from ctrlxt.storage.protocol import EntityStore
from ctrlxt.tracing.bus import EventBus
from ctrlxt.tracing.models import EventKind
from ctrlxt.world.models import Marker, WorldConfiguration, ZeroPoint
from ctrlxt.world.result import ChangeOutcome, ChangeReport

if TYPE_CHECKING:
    from ctrlxt.core.entity.operations import RandomSource

logger = logging.getLogger(__name__)

MARKER_PREFIX = "marker"


class World:
    """In-memory world state owned by its caller.

    Entities change only through apply_changes() and the tagging methods;
    the clock only through set_time_state(). Rejected operations are logged,
    published on ``events`` and leave the World in its last valid state.
    """

    def __init__(
        self,
        dimensions: Any,
        configuration: WorldConfiguration | None = None,
        *,
        name: str | None = None,
        store: EntityStore | None = None,
        events: EventBus | None = None,
        time_state: TimeState = TimeState.PLAY,
        time_speed: float = DEFAULT_SPEED,
        markers: Iterable[Marker] = (),
        zero_point: ZeroPoint | None = None,
    ):
        self._dimensions = Vector3.from_value(dimensions)
        self._configuration = configuration or WorldConfiguration()
        self._name = name
        self._store = store if store is not None else LocalEntityStore()
        self._events = events if events is not None else EventBus()
        self._time_state = time_state
        self._time_speed = float(time_speed)
        self._markers: list[Marker] = list(markers)
        self._zero_point = zero_point or ZeroPoint()

    def __repr__(self) -> str:
        label = f" {self._name!r}" if self._name else ""
        return (
            f"<World{label} entities={len(self._store)} markers={len(self._markers)} "
            f"time={self._time_state.value}x{self._time_speed:g}>"
        )

    # Read access

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def dimensions(self) -> Vector3:
        return self._dimensions

    @property
    def configuration(self) -> WorldConfiguration:
        return self._configuration

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def entities(self) -> list[Entity]:
        """Entities in insertion order."""
        return list(self._store)

    @property
    def markers(self) -> tuple[Marker, ...]:
        """Marker log, oldest first. Append-only through CreateMarker changes."""
        return tuple(self._markers)

    @property
    def time_state(self) -> TimeState:
        return self._time_state

    @property
    def time_speed(self) -> float:
        return self._time_speed

    @property
    def zero_point(self) -> ZeroPoint:
        return self._zero_point

    def get(self, entity_id: str) -> Entity | None:
        """Look up an entity by id. The returned entity is live, not a copy."""
        return self._store.get(entity_id)

    def entity_ids(self) -> list[str]:
        return self._store.ids()

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._store

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    # Change protocol

    def apply_changes(self, changes: Iterable[Any]) -> ChangeReport:
        """Apply a batch of changes one at a time, in order.

        Each change is validated independently; a rejected change is reported
        and the batch continues. Later changes see the effects of earlier ones.

        Args:
            changes: Typed changes or dict records (see ctrlxt.core.change).

        Returns:
            ChangeReport with one outcome per change.
        """
        batch = normalize_changes(changes)
        logger.debug("[%s] Applying %d changes", self._name, len(batch))
        result = ChangeReport()
        for index, change in enumerate(batch):
            result.record(self.apply_change(change, index=index))
        return result

    def apply_change(self, change: Any, index: int = 0) -> ChangeOutcome:
        """Validate and apply a single change.

        Args:
            change: Typed change or dict record.
            index: Position in the caller's batch, for reporting.

        Returns:
            ChangeOutcome; ``error`` is set when the change was rejected.
        """
        typed = parse_change(change)
        if isinstance(typed, AddChange):
            error = self._apply_add(typed)
        elif isinstance(typed, RemoveChange):
            error = self._apply_remove(typed)
        elif isinstance(typed, ModifyChange):
            error = self._apply_modify(typed)
        elif isinstance(typed, CreateMarkerChange):
            error = self._apply_create_marker(typed)
        else:
            error = ValidationError(f"Unknown change type: {typed.type_name!r}")

        if error is not None:
            self.reject(typed, error, index)
        return ChangeOutcome(index=index, kind=typed.kind, target_id=typed.target_id, error=error)

    def reject(self, change: Change, error: WorldError, index: int = 0) -> None:
        """Report a change as rejected without applying it."""
        change_type = change.kind.value if change.kind is not None else repr(change.type_name)
        report(
            logger,
            error,
            events=self._events,
            kind=EventKind.CHANGE_REJECTED,
            world=self._name,
            entity_ids=[change.target_id] if change.target_id else [],
            change_index=index,
            change_type=change_type,
        )

    def _apply_add(self, change: AddChange) -> WorldError | None:
        entity = change.entity
        if entity is None or not entity.id:
            return ValidationError("'add' change requires a valid entity with an 'id'")
        if entity.id in self._store:
            return DuplicateError(
                f"Entity with id '{entity.id}' already exists in this world. Skipping addition"
            )
        self._store.insert(entity)
        emit(self._events, EventKind.ENTITY_ADDED, world=self._name, entity_ids=[entity.id])
        return None

    def _apply_remove(self, change: RemoveChange) -> WorldError | None:
        if not change.target_id:
            return ValidationError("'remove' change requires a 'targetId'")
        removed = self._store.remove(change.target_id)
        if removed is None:
            logger.debug("[%s] Remove of absent entity '%s' ignored", self._name, change.target_id)
            return None
        emit(self._events, EventKind.ENTITY_REMOVED, world=self._name, entity_ids=[removed.id])
        return None

    def _apply_modify(self, change: ModifyChange) -> WorldError | None:
        if not change.target_id or change.properties is None:
            return ValidationError("'modify' change requires 'targetId' and 'properties'")
        entity = self._store.get(change.target_id)
        if entity is None:
            return NotFoundError(f"Entity with id '{change.target_id}' not found for modification")
        entity.merge(change.properties)
        emit(
            self._events,
            EventKind.ENTITY_MODIFIED,
            world=self._name,
            entity_ids=[entity.id],
            properties=dict(change.properties),
        )
        return None

    def _apply_create_marker(self, change: CreateMarkerChange) -> WorldError | None:
        if change.coordinates is None:
            return ValidationError("'createBlinkSpot' change requires 'coordinates'")
        try:
            coordinates = Vector3.from_value(change.coordinates)
        except ValueError as e:
            return ValidationError(f"Invalid marker coordinates: {e}")

        marker = Marker(
            id=f"{MARKER_PREFIX}-{len(self._markers)}",
            coordinates=coordinates,
            time_state=self._time_state,
        )
        self._markers.append(marker)
        emit(
            self._events,
            EventKind.MARKER_CREATED,
            world=self._name,
            marker_id=marker.id,
            coordinates=coordinates.to_dict(),
            time_state=marker.time_state.value,
        )
        return None

    # Time controller

    def set_time_state(self, requested: Any, speed: float = DEFAULT_SPEED) -> TimeState:
        """Transition the clock.

        Unknown labels leave state and speed untouched. FAST FORWARD or REWIND
        with a non-positive speed falls back to PLAY at speed 1. PLAY, PAUSE
        and STOP always run at speed 1.

        Args:
            requested: TimeState or label such as "FAST FORWARD".
            speed: Multiplier for FAST FORWARD and REWIND.

        Returns:
            The resulting time state.
        """
        previous = self._time_state
        transition = resolve_transition(self._time_state, self._time_speed, requested, speed)
        self._time_state = transition.state
        self._time_speed = transition.speed

        if not transition.accepted:
            report(
                logger,
                InvalidStateError(transition.reason),
                events=self._events,
                kind=EventKind.TIME_STATE_REJECTED,
                world=self._name,
                requested=requested.value if isinstance(requested, TimeState) else requested,
                speed=speed,
            )
            if TimeState.parse(requested) is None:
                return self._time_state

        logger.debug(
            "[%s] Time state set to %s with speed %s",
            self._name,
            self._time_state.value,
            self._time_speed,
        )
        emit(
            self._events,
            EventKind.TIME_STATE_CHANGED,
            world=self._name,
            previous=previous.value,
            state=self._time_state.value,
            speed=self._time_speed,
        )
        return self._time_state

    # Relation and state operations

    def _resolve(self, entity_ids: Sequence[str], operation: str) -> list[Entity] | None:
        missing = [entity_id for entity_id in entity_ids if entity_id not in self._store]
        if missing:
            report(
                logger,
                NotFoundError(f"Entities not found for {operation}: {', '.join(missing)}"),
                events=self._events,
                world=self._name,
                entity_ids=missing,
                operation=operation,
            )
            return None
        return [entity for entity in map(self._store.get, entity_ids) if entity is not None]

    def link(self, *entity_ids: str) -> bool:
        """Link entities by id. See ctrlxt.core.entity.link()."""
        entities = self._resolve(entity_ids, "link")
        if entities is None:
            return False
        return operations.link(entities, events=self._events, world=self._name)

    def unlink(self, entity_id: str) -> bool:
        """Clear one entity's link tag. Partners keep theirs."""
        entities = self._resolve([entity_id], "unlink")
        if entities is None:
            return False
        return operations.unlink(entities[0], events=self._events, world=self._name)

    def set_states(self, entity_id: str, states: Sequence[Any], initial_index: int = 0) -> bool:
        """Give an entity a multi-state slot. See ctrlxt.core.entity.set_states()."""
        entities = self._resolve([entity_id], "set_states")
        if entities is None:
            return False
        return operations.set_states(
            entities[0], states, initial_index, events=self._events, world=self._name
        )

    def set_current_index(self, entity_id: str, new_index: int) -> bool:
        """Switch an entity's active state value."""
        entities = self._resolve([entity_id], "set_current_index")
        if entities is None:
            return False
        return operations.set_current_index(
            entities[0], new_index, events=self._events, world=self._name
        )

    def attempt_crossing(
        self,
        subject_id: str,
        barrier_id: str,
        probability: float,
        rng: RandomSource | None = None,
    ) -> CrossingOutcome | None:
        """Run a boundary check between two entities of this World.

        Returns:
            The outcome, or None if either id is unknown.
        """
        entities = self._resolve([subject_id, barrier_id], "attempt_crossing")
        if entities is None:
            return None
        subject, barrier = entities
        return operations.attempt_crossing(
            subject, barrier, probability, rng=rng, events=self._events, world=self._name
        )

    # Snapshots

    def snapshot(self) -> str:
        """Serialize world state. See ctrlxt.snapshot.serialize()."""
        from ctrlxt.snapshot.codec import serialize

        return serialize(self)

    @classmethod
    def from_snapshot(
        cls,
        encoded: str | bytes,
        *,
        settings: WorldSettings | None = None,
        events: EventBus | None = None,
    ) -> World:
        """Restore a World, falling back to a default World on corrupt input."""
        from ctrlxt.snapshot.codec import restore

        return restore(encoded, settings=settings, events=events)


def create_world(
    dimensions: Any,
    composition: str = "default",
    processing_model: str = "default",
    data_sources: Iterable[str] = (),
    *,
    name: str | None = None,
    spectrum_integrity: Mapping[str, str] | None = None,
    events: EventBus | None = None,
    store: EntityStore | None = None,
) -> World:
    """Create an empty World: no entities, no markers, PLAY at speed 1.

    Args:
        dimensions: Extents as ``{"x", "y", "z"}`` mapping or 3-item sequence.
        composition: Processor composition label.
        processing_model: Processing model label.
        data_sources: Data source names.
        name: Optional label used in logs and events (e.g. "developer").
        spectrum_integrity: Optional per-spectrum integrity labels.
        events: Event bus to publish on; a fresh one is created if omitted.
        store: Entity store; a LocalEntityStore if omitted.

    Returns:
        New World.

    Raises:
        ValueError: If dimensions cannot be read as a 3D extent.
    """
    configuration = WorldConfiguration.build(
        composition, processing_model, data_sources, spectrum_integrity
    )
    world = World(dimensions, configuration, name=name, store=store, events=events)
    logger.info(
        "Created world %r: composition=%s, processing model=%s",
        name,
        configuration.composition,
        configuration.processing_model,
    )
    emit(
        world.events,
        EventKind.WORLD_CREATED,
        world=name,
        dimensions=world.dimensions.to_dict(),
        composition=configuration.composition,
        processing_model=configuration.processing_model,
        data_sources=list(configuration.data_sources),
    )
    return world


def create_default_world(
    settings: WorldSettings | None = None,
    *,
    name: str | None = None,
    events: EventBus | None = None,
) -> World:
    """Create a World from WorldSettings (environment-configurable defaults)."""
    settings = settings or WorldSettings()
    return create_world(
        settings.default_dimensions,
        settings.composition,
        settings.processing_model,
        settings.data_sources,
        name=name,
        events=events,
    )


def apply_changes(world: World, changes: Iterable[Any]) -> ChangeReport:
    """Apply a batch of changes to world. See World.apply_changes()."""
    return world.apply_changes(changes)


def set_time_state(world: World, requested: Any, speed: float = DEFAULT_SPEED) -> TimeState:
    """Transition world's clock. See World.set_time_state()."""
    return world.set_time_state(requested, speed)
