"""Ready-made event sinks.

Usage:
    world.events.subscribe(LoggingSink())

    recorder = RecordingSink(max_events=500)
    world.events.subscribe(recorder)
    ...
    rejected = recorder.of_kind(EventKind.CHANGE_REJECTED)
"""

from __future__ import annotations

import logging
from collections import deque

from ctrlxt.tracing.models import EventKind, WorldEvent

EVENT_LOGGER_NAME = "ctrlxt.events"


class LoggingSink:
    """Narrates events through the standard logging module.

    Rejections are logged at WARNING, everything else at ``level``.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger(EVENT_LOGGER_NAME)
        self._level = level

    def __call__(self, event: WorldEvent) -> None:
        level = logging.WARNING if event.kind.is_rejection else self._level
        self._logger.log(level, "%s", event.describe())


class RecordingSink:
    """Keeps the most recent events in memory for inspection and replay.

    Args:
        max_events: Bound on retained events. None keeps everything.
    """

    def __init__(self, max_events: int | None = None):
        self._events: deque[WorldEvent] = deque(maxlen=max_events)

    def __call__(self, event: WorldEvent) -> None:
        self._events.append(event)

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> list[WorldEvent]:
        return list(self._events)

    @property
    def kinds(self) -> list[EventKind]:
        return [event.kind for event in self._events]

    def of_kind(self, kind: EventKind) -> list[WorldEvent]:
        """Return recorded events of one kind, oldest first."""
        return [event for event in self._events if event.kind == kind]

    def clear(self) -> None:
        self._events.clear()
