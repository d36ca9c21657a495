"""Normalization of change records into typed changes.

Supported record formats:
    {"type": "add", "object": {"id": "p1", "color": "blue"}}      # or "entity"
    {"type": "remove", "targetId": "p1"}                           # or "target_id"
    {"type": "modify", "targetId": "p1", "properties": {"hp": 10}}
    {"type": "createBlinkSpot", "coordinates": {"x": 1, "y": 2, "z": 0}}  # or "create_marker"
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ctrlxt.core.change.models import (
    AddChange,
    Change,
    ChangeKind,
    CreateMarkerChange,
    ModifyChange,
    RemoveChange,
    UnknownChange,
)
from ctrlxt.core.entity.models import Entity

_TYPE_ALIASES = {
    "add": ChangeKind.ADD,
    "remove": ChangeKind.REMOVE,
    "modify": ChangeKind.MODIFY,
    "createblinkspot": ChangeKind.CREATE_MARKER,
    "create_marker": ChangeKind.CREATE_MARKER,
    "createmarker": ChangeKind.CREATE_MARKER,
}

_CHANGE_TYPES = (AddChange, RemoveChange, ModifyChange, CreateMarkerChange, UnknownChange)


def _target_id(record: Mapping[str, Any]) -> str | None:
    raw = record.get("targetId", record.get("target_id"))
    if raw is None or raw == "":
        return None
    return str(raw)


def _resolve_kind(type_name: Any) -> ChangeKind | None:
    if isinstance(type_name, ChangeKind):
        return type_name
    if not isinstance(type_name, str):
        return None
    return _TYPE_ALIASES.get(type_name.strip().lower())


def parse_change(record: Any) -> Change:
    """Convert a dict record (or an already typed change) to a typed change.

    Never raises: anything unrecognizable becomes an UnknownChange, which the
    World rejects and reports.

    Args:
        record: Typed change or mapping in the record format.

    Returns:
        Typed change.
    """
    if isinstance(record, _CHANGE_TYPES):
        return record
    if not isinstance(record, Mapping):
        return UnknownChange(type_name=type(record).__name__, raw=record)

    type_name = record.get("type")
    kind = _resolve_kind(type_name)

    if kind is ChangeKind.ADD:
        payload = record.get("object", record.get("entity"))
        if isinstance(payload, Entity):
            return AddChange(entity=payload)
        if isinstance(payload, Mapping):
            return AddChange(entity=Entity.from_record(payload))
        return AddChange(entity=None)

    if kind is ChangeKind.REMOVE:
        return RemoveChange(target_id=_target_id(record))

    if kind is ChangeKind.MODIFY:
        properties = record.get("properties")
        return ModifyChange(
            target_id=_target_id(record),
            properties=properties if isinstance(properties, Mapping) else None,
        )

    if kind is ChangeKind.CREATE_MARKER:
        return CreateMarkerChange(coordinates=record.get("coordinates"))

    return UnknownChange(type_name=type_name, raw=record)


def normalize_changes(changes: Iterable[Any]) -> list[Change]:
    """Parse every record in a batch, preserving order.

    Raises:
        TypeError: If changes is a single mapping or string instead of a batch.
    """
    if isinstance(changes, (Mapping, str, bytes)):
        raise TypeError(f"Expected a sequence of changes, got {type(changes).__name__}")
    return [parse_change(record) for record in changes]
