"""Tracing infrastructure: observable events emitted by Worlds.

The engine never prints. Every mutation, rejection and time-state transition
is published as a WorldEvent on the World's EventBus; subscribe a sink to
narrate, record or forward them.

Usage:
    from ctrlxt.tracing import EventKind, LoggingSink, RecordingSink

    world.events.subscribe(LoggingSink())
    world.events.subscribe(my_handler, kinds=[EventKind.CHANGE_REJECTED])
"""

from ctrlxt.tracing.bus import EventBus
from ctrlxt.tracing.models import EventKind, WorldEvent
from ctrlxt.tracing.protocol import EventHandler, EventPublisher, EventSink
from ctrlxt.tracing.sinks import LoggingSink, RecordingSink

__all__ = [
    "EventBus",
    "EventHandler",
    "EventKind",
    "EventPublisher",
    "EventSink",
    "LoggingSink",
    "RecordingSink",
    "WorldEvent",
]
