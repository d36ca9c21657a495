"""Change functionality: typed change records and record normalization."""

from ctrlxt.core.change.core import normalize_changes, parse_change
from ctrlxt.core.change.models import (
    AddChange,
    Change,
    ChangeKind,
    CreateMarkerChange,
    ModifyChange,
    RemoveChange,
    UnknownChange,
)

__all__ = [
    # Models
    "Change",
    "ChangeKind",
    "AddChange",
    "RemoveChange",
    "ModifyChange",
    "CreateMarkerChange",
    "UnknownChange",
    # Core
    "parse_change",
    "normalize_changes",
]
