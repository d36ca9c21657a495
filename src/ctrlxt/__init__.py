"""ctrlxt: in-memory world state engine with transactional change application.

Usage:
    from ctrlxt import create_world, restore

    world = create_world({"x": 100, "y": 100, "z": 100}, "CosmicDustEntanglement",
                         "BioQuantumEntangled", ["QuantumGPS"], name="developer")

    world.apply_changes([
        {"type": "add", "object": {"id": "devObj1", "color": "blue"}},
        {"type": "modify", "targetId": "devObj1", "properties": {"size": 10}},
        {"type": "createBlinkSpot", "coordinates": {"x": 20, "y": 30, "z": 0}},
    ])
    world.set_time_state("FAST FORWARD", speed=2)

    world.apply_changes([{"type": "add", "object": {"id": "devObj2"}}])
    world.link("devObj1", "devObj2")
    world.set_states("devObj1", ["red", "green", "blue"], initial_index=1)

    copy = restore(world.snapshot())
"""

__version__ = "0.1.0"

# Core primitives
from ctrlxt.core import (
    AddChange,
    Change,
    ChangeKind,
    CorruptionError,
    CreateMarkerChange,
    CrossingOutcome,
    DuplicateError,
    Entity,
    InvalidStateError,
    ModifyChange,
    NotFoundError,
    RelationTag,
    RemoveChange,
    StateSlot,
    TimeState,
    ValidationError,
    Vector3,
    WorldError,
    attempt_crossing,
    link,
    set_current_index,
    set_states,
    unlink,
)

# Configuration
from ctrlxt.config import LoggingSettings, WorldSettings, configure_logging

# Snapshots
from ctrlxt.snapshot import restore, serialize

# Storage
from ctrlxt.storage import EntityStore, LocalEntityStore

# Tracing
from ctrlxt.tracing import EventBus, EventKind, LoggingSink, RecordingSink, WorldEvent

# World
from ctrlxt.world import (
    AccessViolationError,
    ChangeOutcome,
    ChangePolicy,
    ChangeReport,
    Marker,
    ScopedWorld,
    SynchronizedWorld,
    World,
    WorldConfiguration,
    ZeroPoint,
    apply_changes,
    create_default_world,
    create_world,
    set_time_state,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Vector3",
    "Entity",
    "RelationTag",
    "StateSlot",
    "CrossingOutcome",
    "link",
    "unlink",
    "set_states",
    "set_current_index",
    "attempt_crossing",
    "Change",
    "ChangeKind",
    "AddChange",
    "RemoveChange",
    "ModifyChange",
    "CreateMarkerChange",
    "TimeState",
    # Errors
    "WorldError",
    "ValidationError",
    "NotFoundError",
    "DuplicateError",
    "InvalidStateError",
    "CorruptionError",
    "AccessViolationError",
    # World
    "World",
    "WorldConfiguration",
    "Marker",
    "ZeroPoint",
    "create_world",
    "create_default_world",
    "apply_changes",
    "set_time_state",
    "ChangeOutcome",
    "ChangeReport",
    "ChangePolicy",
    "ScopedWorld",
    "SynchronizedWorld",
    # Storage
    "EntityStore",
    "LocalEntityStore",
    # Snapshots
    "serialize",
    "restore",
    # Tracing
    "EventBus",
    "EventKind",
    "WorldEvent",
    "LoggingSink",
    "RecordingSink",
    # Config
    "WorldSettings",
    "LoggingSettings",
    "configure_logging",
]
