"""Lock-guarded World access for multi-threaded callers.

Worlds are not thread-safe. SynchronizedWorld serializes every operation on
one World behind a single re-entrant lock.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence
from typing import Any

from ctrlxt.core.time import DEFAULT_SPEED, TimeState
from ctrlxt.world.result import ChangeReport
from ctrlxt.world.world import World


class SynchronizedWorld:
    """Thread-safe facade over one World.

    Hold ``lock`` to group several operations into one critical section:

        with synced.lock:
            synced.apply_changes(batch)
            encoded = synced.snapshot()
    """

    def __init__(self, world: World):
        self._world = world
        self._lock = threading.RLock()

    @property
    def world(self) -> World:
        """Underlying World. Access it directly only while holding ``lock``."""
        return self._world

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def apply_changes(self, changes: Iterable[Any]) -> ChangeReport:
        with self._lock:
            return self._world.apply_changes(changes)

    def set_time_state(self, requested: Any, speed: float = DEFAULT_SPEED) -> TimeState:
        with self._lock:
            return self._world.set_time_state(requested, speed)

    def link(self, *entity_ids: str) -> bool:
        with self._lock:
            return self._world.link(*entity_ids)

    def unlink(self, entity_id: str) -> bool:
        with self._lock:
            return self._world.unlink(entity_id)

    def set_states(self, entity_id: str, states: Sequence[Any], initial_index: int = 0) -> bool:
        with self._lock:
            return self._world.set_states(entity_id, states, initial_index)

    def set_current_index(self, entity_id: str, new_index: int) -> bool:
        with self._lock:
            return self._world.set_current_index(entity_id, new_index)

    def snapshot(self) -> str:
        with self._lock:
            return self._world.snapshot()
