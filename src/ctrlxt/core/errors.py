"""Error taxonomy for world operations.

Engine operations do not raise these. They are constructed, logged, attached to
change reports and published as events, and the World is left in its last valid
state.
"""

from __future__ import annotations

import logging
from typing import ClassVar


class WorldError(Exception):
    """Base class for all reported world errors."""

    log_level: ClassVar[int] = logging.ERROR


class ValidationError(WorldError):
    """A change or operation argument is missing or malformed."""


class NotFoundError(WorldError):
    """An operation targeted an entity that does not exist or has no such tag."""

    log_level: ClassVar[int] = logging.WARNING


class DuplicateError(WorldError):
    """An entity with the same id already exists."""

    log_level: ClassVar[int] = logging.WARNING


class InvalidStateError(WorldError):
    """Unrecognized time-state label or non-positive speed."""


class CorruptionError(WorldError):
    """A snapshot could not be decoded."""
