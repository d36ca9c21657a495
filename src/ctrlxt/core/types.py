"""Core value types for ctrlxt."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Vector3:
    """Three-component point or extent.

    Used for world dimensions, marker coordinates and the zero-point anchor.
    Missing axes default to 0 when built from a mapping, so 2D positions
    like ``{"x": 5, "y": 5}`` are accepted.
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_value(cls, value: Any) -> Vector3:
        """Build from a Vector3, an ``{x, y, z}`` mapping, or a 2/3-item sequence.

        Args:
            value: Source value.

        Returns:
            New Vector3.

        Raises:
            ValueError: If value has no recognizable shape or non-numeric axes.
        """
        if isinstance(value, Vector3):
            return value
        if isinstance(value, Mapping):
            unknown = set(value) - {"x", "y", "z"}
            if unknown:
                raise ValueError(f"Unexpected axes {sorted(unknown)} in {value!r}")
            axes = [value.get(axis, 0.0) for axis in ("x", "y", "z")]
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            if len(value) not in (2, 3):
                raise ValueError(f"Expected 2 or 3 axes, got {len(value)}")
            axes = [*value, 0.0][:3]
        else:
            raise ValueError(f"Cannot interpret {value!r} as a 3D vector")

        for axis in axes:
            if isinstance(axis, bool) or not isinstance(axis, (int, float)):
                raise ValueError(f"Axis value {axis!r} is not a number")
        return cls(float(axes[0]), float(axes[1]), float(axes[2]))

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


ORIGIN = Vector3()
