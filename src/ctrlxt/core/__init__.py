"""Core functionalities: stateless models and operations.

Architecture Note:
    core/ contains value types, change records, the time transition function
    and entity tagging operations. None of it owns a World. For stateful
    services, see world/, storage/ and snapshot/.
"""

from ctrlxt.core.change import (
    AddChange,
    Change,
    ChangeKind,
    CreateMarkerChange,
    ModifyChange,
    RemoveChange,
    UnknownChange,
    normalize_changes,
    parse_change,
)
from ctrlxt.core.entity import (
    CrossingOutcome,
    Entity,
    RelationTag,
    StateSlot,
    attempt_crossing,
    link,
    set_current_index,
    set_states,
    unlink,
)
from ctrlxt.core.errors import (
    CorruptionError,
    DuplicateError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
    WorldError,
)
from ctrlxt.core.time import TimeState, TimeTransition, resolve_transition
from ctrlxt.core.types import ORIGIN, Vector3

__all__ = [
    # Types
    "Vector3",
    "ORIGIN",
    # Errors
    "WorldError",
    "ValidationError",
    "NotFoundError",
    "DuplicateError",
    "InvalidStateError",
    "CorruptionError",
    # Entity
    "Entity",
    "RelationTag",
    "StateSlot",
    "CrossingOutcome",
    "link",
    "unlink",
    "set_states",
    "set_current_index",
    "attempt_crossing",
    # Change
    "Change",
    "ChangeKind",
    "AddChange",
    "RemoveChange",
    "ModifyChange",
    "CreateMarkerChange",
    "UnknownChange",
    "parse_change",
    "normalize_changes",
    # Time
    "TimeState",
    "TimeTransition",
    "resolve_transition",
]
