"""Caller-side change policies for restricting what a World accepts.

The World itself accepts every valid change; restriction is a caller policy.
ScopedWorld applies one on top of a World, e.g. an add-only player world next
to an unrestricted developer world.

Usage:
    player = ScopedWorld(player_world, ChangePolicy.add_only())
    report = player.apply_changes([{"type": "remove", "targetId": "p1"}])
    assert isinstance(report.rejected[0].error, AccessViolationError)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar

from ctrlxt.core.change import ChangeKind, normalize_changes
from ctrlxt.core.errors import WorldError
from ctrlxt.world.result import ChangeOutcome, ChangeReport
from ctrlxt.world.world import World


class AccessViolationError(WorldError):
    """A change policy forbids the change kind."""

    log_level: ClassVar[int] = logging.WARNING


@dataclass(frozen=True, slots=True)
class ChangePolicy:
    """Set of change kinds a caller may apply."""

    allowed: frozenset[ChangeKind]

    @classmethod
    def full(cls) -> ChangePolicy:
        return cls(allowed=frozenset(ChangeKind))

    @classmethod
    def add_only(cls) -> ChangePolicy:
        return cls(allowed=frozenset({ChangeKind.ADD}))

    def permits(self, kind: ChangeKind) -> bool:
        return kind in self.allowed


class ScopedWorld:
    """World view that filters changes through a ChangePolicy.

    Args:
        world: Underlying World.
        policy: Policy applied to every change.
    """

    def __init__(self, world: World, policy: ChangePolicy):
        self._world = world
        self._policy = policy

    @property
    def world(self) -> World:
        return self._world

    @property
    def policy(self) -> ChangePolicy:
        return self._policy

    def apply_changes(self, changes: Iterable[Any]) -> ChangeReport:
        """Apply permitted changes in order; report forbidden ones as rejected.

        Args:
            changes: Typed changes or dict records.

        Returns:
            ChangeReport covering every change in the batch.
        """
        result = ChangeReport()
        for index, change in enumerate(normalize_changes(changes)):
            # Unknown kinds pass through so the World reports them as unknown
            if change.kind is None or self._policy.permits(change.kind):
                result.record(self._world.apply_change(change, index=index))
                continue

            error = AccessViolationError(
                f"'{change.kind.value}' changes are not permitted by this policy"
            )
            self._world.reject(change, error, index)
            result.record(
                ChangeOutcome(index=index, kind=change.kind, target_id=change.target_id, error=error)
            )
        return result
