"""World metadata models: configuration labels, markers, reference frame."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from ctrlxt.core.time import TimeState
from ctrlxt.core.types import ORIGIN, Vector3


@dataclass(frozen=True, slots=True)
class WorldConfiguration:
    """Descriptive labels fixed at creation. Not interpreted by the engine.

    Attributes:
        composition: Processor composition label (e.g. "CosmicDustEntanglement").
        processing_model: Processing model label (e.g. "BioQuantumEntangled").
        data_sources: Names of data sources feeding the World.
        spectrum_integrity: Per-spectrum integrity labels (e.g. {"red": "Nominal"}).
    """

    composition: str = "default"
    processing_model: str = "default"
    data_sources: tuple[str, ...] = ()
    spectrum_integrity: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        composition: str,
        processing_model: str,
        data_sources: Iterable[str] = (),
        spectrum_integrity: Mapping[str, str] | None = None,
    ) -> WorldConfiguration:
        return cls(
            composition=composition,
            processing_model=processing_model,
            data_sources=tuple(data_sources),
            spectrum_integrity=dict(spectrum_integrity or {}),
        )


@dataclass(frozen=True, slots=True)
class Marker:
    """Named point in the marker log ("blink spot").

    ``time_state`` is the World's clock state when the marker was created.
    """

    id: str
    coordinates: Vector3
    time_state: TimeState


@dataclass(frozen=True, slots=True)
class ZeroPoint:
    """Origin anchor of the World's reference frame."""

    frequency: float = 0.0
    coordinates: Vector3 = ORIGIN
