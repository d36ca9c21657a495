"""Entity functionality: models and stateless tagging operations."""

from ctrlxt.core.entity.models import CrossingOutcome, Entity, RelationTag, StateSlot
from ctrlxt.core.entity.operations import (
    CROSSING_FAILURE,
    CROSSING_SUCCESS,
    RandomSource,
    attempt_crossing,
    link,
    set_current_index,
    set_states,
    unlink,
)

__all__ = [
    # Models
    "Entity",
    "RelationTag",
    "StateSlot",
    "CrossingOutcome",
    # Operations
    "link",
    "unlink",
    "set_states",
    "set_current_index",
    "attempt_crossing",
    "RandomSource",
    "CROSSING_SUCCESS",
    "CROSSING_FAILURE",
]
