"""Time-control states of a World's simulated clock."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TimeState(Enum):
    """Clock state. Values are the wire labels used in change records and snapshots."""

    PLAY = "PLAY"
    PAUSE = "PAUSE"
    STOP = "STOP"
    FAST_FORWARD = "FAST FORWARD"
    REWIND = "REWIND"

    @property
    def uses_speed(self) -> bool:
        """True for states where the speed multiplier is meaningful."""
        return self in (TimeState.FAST_FORWARD, TimeState.REWIND)

    @classmethod
    def parse(cls, value: Any) -> TimeState | None:
        """Resolve a TimeState from an enum member or label.

        Labels match case-insensitively, with ``_`` and `` `` interchangeable
        ("FAST FORWARD", "fast_forward").

        Returns:
            Matching state, or None if value is not a known label.
        """
        if isinstance(value, TimeState):
            return value
        if not isinstance(value, str):
            return None
        label = " ".join(value.strip().upper().replace("_", " ").split())
        for state in cls:
            if state.value == label:
                return state
        return None


@dataclass(frozen=True, slots=True)
class TimeTransition:
    """Outcome of a requested clock transition.

    Attributes:
        state: Resulting state.
        speed: Resulting speed multiplier.
        accepted: False when the request was invalid and a fallback or
            rollback was applied instead.
        reason: Why the request was not accepted as given.
    """

    state: TimeState
    speed: float
    accepted: bool = True
    reason: str | None = None
