"""Event bus for decoupled world observability."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ctrlxt.tracing.models import EventKind, WorldEvent
from ctrlxt.tracing.protocol import EventHandler

logger = logging.getLogger(__name__)


class EventBus:
    """Publishes world events to subscribed handlers.

    Handlers subscribe to specific kinds or, with no kinds, to every event.
    Events published from inside a handler are queued and delivered after the
    current dispatch finishes, so handlers always see events in publish order.
    A handler that raises is logged and skipped; the remaining handlers still
    receive the event and the publishing operation carries on.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventKind | None, list[EventHandler]] = {}
        self._queued_events: list[WorldEvent] = []
        self._dispatching = False

    def subscribe(
        self, handler: EventHandler, kinds: Iterable[EventKind] | None = None
    ) -> EventHandler:
        """Subscribe a handler.

        Args:
            handler: Callable receiving each matching event.
            kinds: Event kinds to receive. None receives all events.

        Returns:
            The handler, so this can be used as a decorator.
        """
        keys: list[EventKind | None] = [None] if kinds is None else list(kinds)
        for key in keys:
            self._handlers.setdefault(key, []).append(handler)
        return handler

    def unsubscribe(self, handler: EventHandler) -> None:
        """Remove a handler from every kind it was subscribed to."""
        for handlers in self._handlers.values():
            while handler in handlers:
                handlers.remove(handler)

    def publish(self, event: WorldEvent) -> None:
        """Deliver event to subscribers."""
        self._queued_events.append(event)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._queued_events:
                self._dispatch(self._queued_events.pop(0))
        finally:
            self._dispatching = False
            self._queued_events.clear()

    def _dispatch(self, event: WorldEvent) -> None:
        handlers = [*self._handlers.get(event.kind, ()), *self._handlers.get(None, ())]
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler %r failed on %s", handler, event.kind.value)

    @property
    def handler_count(self) -> int:
        return sum(len(handlers) for handlers in self._handlers.values())

    def clear(self) -> None:
        """Drop all handlers and pending events."""
        self._handlers.clear()
        self._queued_events.clear()
