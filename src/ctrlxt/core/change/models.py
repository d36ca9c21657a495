"""Change records: the closed set of mutations a World accepts.

Changes are validated when applied, not when built, so a record with missing
fields can still be constructed and will be rejected (and reported) by the
World instead of aborting the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from ctrlxt.core.entity.models import Entity


class ChangeKind(Enum):
    """Change types. Values are the ``type`` field of the dict record format."""

    ADD = "add"
    REMOVE = "remove"
    MODIFY = "modify"
    CREATE_MARKER = "createBlinkSpot"


@dataclass(frozen=True, slots=True)
class AddChange:
    """Insert an entity; rejected if its id is empty or already present."""

    entity: Entity | None

    kind: ClassVar[ChangeKind] = ChangeKind.ADD

    @property
    def target_id(self) -> str | None:
        return self.entity.id if self.entity is not None else None


@dataclass(frozen=True, slots=True)
class RemoveChange:
    """Delete an entity by id; removing an absent id is a no-op."""

    target_id: str | None

    kind: ClassVar[ChangeKind] = ChangeKind.REMOVE


@dataclass(frozen=True, slots=True)
class ModifyChange:
    """Shallow-merge properties into an existing entity."""

    target_id: str | None
    properties: Mapping[str, Any] | None

    kind: ClassVar[ChangeKind] = ChangeKind.MODIFY


@dataclass(frozen=True, slots=True)
class CreateMarkerChange:
    """Append a named point to the World's marker log.

    ``coordinates`` is anything Vector3.from_value() accepts.
    """

    coordinates: Any

    kind: ClassVar[ChangeKind] = ChangeKind.CREATE_MARKER

    @property
    def target_id(self) -> str | None:
        return None


@dataclass(frozen=True, slots=True)
class UnknownChange:
    """Record whose type is not recognized. Always rejected."""

    type_name: Any
    raw: Any = field(default=None, compare=False)

    kind: ClassVar[ChangeKind | None] = None

    @property
    def target_id(self) -> str | None:
        return None


Change = AddChange | RemoveChange | ModifyChange | CreateMarkerChange | UnknownChange
