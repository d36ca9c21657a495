"""Snapshot codec: lossless JSON encoding of Worlds with default-World fallback."""

from ctrlxt.snapshot.codec import restore, serialize
from ctrlxt.snapshot.models import FORMAT_VERSION, WorldDocument

__all__ = [
    "serialize",
    "restore",
    "WorldDocument",
    "FORMAT_VERSION",
]
