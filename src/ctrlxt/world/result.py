"""Per-change outcomes of a change batch.

Usage:
    report = world.apply_changes(changes)
    if not report.ok:
        for outcome in report.rejected:
            print(outcome.index, outcome.error)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ctrlxt.core.change import ChangeKind
from ctrlxt.core.errors import WorldError


@dataclass(frozen=True, slots=True)
class ChangeOutcome:
    """Result of applying one change.

    Attributes:
        index: Position of the change in its batch.
        kind: Change kind, None for unrecognized records.
        target_id: Entity the change addressed, if any.
        error: Why the change was rejected; None when applied.
    """

    index: int
    kind: ChangeKind | None
    target_id: str | None = None
    error: WorldError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ChangeReport:
    """Accumulated outcomes of a batch, in application order."""

    outcomes: list[ChangeOutcome] = field(default_factory=list)

    @property
    def applied(self) -> list[ChangeOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def rejected(self) -> list[ChangeOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def ok(self) -> bool:
        """True when no change in the batch was rejected."""
        return all(outcome.ok for outcome in self.outcomes)

    def record(self, outcome: ChangeOutcome) -> None:
        self.outcomes.append(outcome)

    def __len__(self) -> int:
        return len(self.outcomes)
