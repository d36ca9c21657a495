"""Protocols for event tracing.

A World publishes WorldEvents on its EventBus; anything matching these
protocols can subscribe (loggers, recorders, UI narrators).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ctrlxt.tracing.models import WorldEvent

EventHandler = Callable[["WorldEvent"], None]
"""Signature: (event) -> None"""


@runtime_checkable
class EventSink(Protocol):
    """Callable receiver of world events.

    Usage:
        class PrintSink:
            def __call__(self, event: WorldEvent) -> None:
                print(event.describe())

        world.events.subscribe(PrintSink())
    """

    def __call__(self, event: WorldEvent) -> None:
        """Handle one event. Called synchronously from inside the operation."""
        ...


@runtime_checkable
class EventPublisher(Protocol):
    """Anything core operations can publish events to."""

    def publish(self, event: WorldEvent) -> None:
        """Deliver event to subscribers."""
        ...
