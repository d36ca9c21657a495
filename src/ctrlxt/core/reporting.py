"""Shared helpers for logging and publishing operation outcomes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from ctrlxt.core.errors import WorldError
from ctrlxt.tracing.models import EventKind, WorldEvent
from ctrlxt.tracing.protocol import EventPublisher


def emit(
    events: EventPublisher | None,
    kind: EventKind,
    *,
    world: str | None = None,
    entity_ids: Iterable[str] = (),
    **data: Any,
) -> None:
    """Publish an event if a publisher is attached."""
    if events is None:
        return
    events.publish(WorldEvent(kind=kind, world=world, entity_ids=tuple(entity_ids), data=data))


def report(
    logger: logging.Logger,
    error: WorldError,
    *,
    events: EventPublisher | None = None,
    kind: EventKind = EventKind.OPERATION_REJECTED,
    world: str | None = None,
    entity_ids: Iterable[str] = (),
    **data: Any,
) -> WorldError:
    """Log a rejected operation and publish it as an event.

    Args:
        logger: Module logger of the caller.
        error: Error describing the rejection; its class picks the log level.
        events: Optional publisher for the rejection event.
        kind: Event kind to publish.
        world: World name for log prefixes and event attribution.
        entity_ids: Entities concerned.
        **data: Extra event data.

    Returns:
        The same error, for storing in results.
    """
    prefix = f"[{world}] " if world else ""
    logger.log(error.log_level, "%s%s: %s", prefix, type(error).__name__, error)
    emit(
        events,
        kind,
        world=world,
        entity_ids=entity_ids,
        error=type(error).__name__,
        reason=str(error),
        **data,
    )
    return error
