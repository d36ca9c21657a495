"""Pure transition function of the time-control state machine.

Every state is reachable from every other. The only constraint is that
FAST FORWARD and REWIND need a finite positive speed.
"""

from __future__ import annotations

import math
from typing import Any

from ctrlxt.core.time.models import TimeState, TimeTransition

DEFAULT_SPEED = 1.0

VALID_LABELS = ", ".join(state.value for state in TimeState)


def resolve_transition(
    current_state: TimeState,
    current_speed: float,
    requested: Any,
    speed: float = DEFAULT_SPEED,
) -> TimeTransition:
    """Compute the clock state after a transition request.

    - Unknown label: rolled back to (current_state, current_speed).
    - FAST FORWARD / REWIND with a speed that is not a finite positive number:
      forced to (PLAY, 1).
    - PLAY / PAUSE / STOP: speed forced to 1.

    Args:
        current_state: State before the request.
        current_speed: Speed before the request.
        requested: TimeState or label.
        speed: Requested multiplier, used only by FAST FORWARD and REWIND.

    Returns:
        TimeTransition describing the resulting state.
    """
    state = TimeState.parse(requested)
    if state is None:
        return TimeTransition(
            state=current_state,
            speed=current_speed,
            accepted=False,
            reason=f"Invalid time state: {requested!r}. Must be one of {VALID_LABELS}",
        )

    if not state.uses_speed:
        return TimeTransition(state=state, speed=DEFAULT_SPEED)

    if (
        isinstance(speed, bool)
        or not isinstance(speed, (int, float))
        or not math.isfinite(speed)
        or speed <= 0
    ):
        return TimeTransition(
            state=TimeState.PLAY,
            speed=DEFAULT_SPEED,
            accepted=False,
            reason=(
                f"Speed for {state.value} must be a finite number > 0, got {speed!r}. "
                "Reverting to PLAY"
            ),
        )

    return TimeTransition(state=state, speed=float(speed))
