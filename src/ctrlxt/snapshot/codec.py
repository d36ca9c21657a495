"""Snapshot codec: World to JSON text and back.

restore() never raises. Input that cannot be decoded or does not match the
document schema yields a fresh default World, so callers always get back
something usable.

Usage:
    encoded = serialize(world)
    same_world = restore(encoded)
    fresh_world = restore("not valid data")  # default World, error logged
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as SchemaError

from ctrlxt.config.settings import WorldSettings
from ctrlxt.core.errors import CorruptionError
from ctrlxt.core.reporting import emit, report
from ctrlxt.snapshot.models import WorldDocument
from ctrlxt.tracing.bus import EventBus
from ctrlxt.tracing.models import EventKind
from ctrlxt.world.world import World, create_default_world

logger = logging.getLogger(__name__)


def serialize(world: World) -> str:
    """Encode the complete World state as JSON text.

    Entity properties must be JSON-compatible for the round trip to be
    lossless (tuples come back as lists). Non-finite floats are written as
    the non-standard constants Infinity, -Infinity and NaN.

    Args:
        world: World to encode.

    Returns:
        JSON document string.
    """
    logger.debug("Serializing world %r", world.name)
    return WorldDocument.from_world(world).model_dump_json()


def restore(
    encoded: str | bytes,
    *,
    settings: WorldSettings | None = None,
    events: EventBus | None = None,
) -> World:
    """Decode a World from serialize() output.

    Args:
        encoded: JSON document.
        settings: Defaults for the fallback World.
        events: Event bus for the returned World; a fresh one if omitted.

    Returns:
        The restored World, or a default World if ``encoded`` is corrupt.
    """
    events = events if events is not None else EventBus()
    try:
        if not isinstance(encoded, (str, bytes, bytearray)):
            raise CorruptionError(f"Expected snapshot text, got {type(encoded).__name__}")
        document = WorldDocument.model_validate_json(encoded)
    except (SchemaError, CorruptionError) as e:
        error = e if isinstance(e, CorruptionError) else CorruptionError(_summarize(e))
        world = create_default_world(settings, events=events)
        report(
            logger,
            error,
            events=events,
            kind=EventKind.SNAPSHOT_FALLBACK,
        )
        return world

    world = document.to_world(events=events)
    emit(
        events,
        EventKind.SNAPSHOT_RESTORED,
        world=world.name,
        entities=len(world),
        markers=len(world.markers),
    )
    return world


def _summarize(error: SchemaError) -> str:
    first = error.errors()[0] if error.error_count() else {"msg": str(error)}
    return f"Invalid saved state ({error.error_count()} errors): {first['msg']}"
