"""World state and change application.

Architecture Note:
    world/ is a stateful service layer. A World owns its entity store, marker
    log and clock; unlike core/ (stateless functionalities), it maintains
    runtime state and publishes events about every mutation.
"""

from ctrlxt.world.access import AccessViolationError, ChangePolicy, ScopedWorld
from ctrlxt.world.models import Marker, WorldConfiguration, ZeroPoint
from ctrlxt.world.result import ChangeOutcome, ChangeReport
from ctrlxt.world.sync import SynchronizedWorld
from ctrlxt.world.world import (
    World,
    apply_changes,
    create_default_world,
    create_world,
    set_time_state,
)

__all__ = [
    "World",
    "create_world",
    "create_default_world",
    "apply_changes",
    "set_time_state",
    "WorldConfiguration",
    "Marker",
    "ZeroPoint",
    "ChangeOutcome",
    "ChangeReport",
    "ChangePolicy",
    "ScopedWorld",
    "AccessViolationError",
    "SynchronizedWorld",
]
