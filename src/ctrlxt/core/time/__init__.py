"""Time-control functionality: clock states and the transition function."""

from ctrlxt.core.time.models import TimeState, TimeTransition
from ctrlxt.core.time.operations import DEFAULT_SPEED, resolve_transition

__all__ = [
    "TimeState",
    "TimeTransition",
    "resolve_transition",
    "DEFAULT_SPEED",
]
