"""Stateless entity tagging operations: linking, multi-state slots, crossing checks.

All operations mutate only the entities passed in. Invalid input is reported
(logged and published) and leaves the entities untouched; nothing is raised.
Each mutating operation returns True when it changed something.
"""

from __future__ import annotations

import logging
import operator
import random
from collections.abc import Sequence
from typing import Any, Protocol

from ctrlxt.core.entity.models import CrossingOutcome, Entity, RelationTag, StateSlot
from ctrlxt.core.errors import NotFoundError, ValidationError
from ctrlxt.core.reporting import emit, report
from ctrlxt.tracing.models import EventKind
from ctrlxt.tracing.protocol import EventPublisher

logger = logging.getLogger(__name__)

CROSSING_SUCCESS = "Quantum Tunneling Event"
CROSSING_FAILURE = "Tunneling attempt failed"


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float: ...


def _as_index(value: Any) -> int | None:
    """Normalize an integer-like index (int, numpy integer, ...); None otherwise."""
    if isinstance(value, bool):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


def link(
    entities: Sequence[Entity],
    *,
    events: EventPublisher | None = None,
    world: str | None = None,
) -> bool:
    """Tag every entity as linked to the whole set.

    Each participant's ``linked_ids`` lists all participant ids in the given
    order, its own id included. Calling again with the same set is a no-op in
    effect.

    Args:
        entities: Two or more entities.
        events: Optional publisher for the outcome event.
        world: World name for attribution.

    Returns:
        True if linked, False if rejected (fewer than two entities).
    """
    if len(entities) < 2:
        report(
            logger,
            ValidationError("Linking requires at least two entities"),
            events=events,
            world=world,
            entity_ids=[entity.id for entity in entities],
            operation="link",
        )
        return False

    ids = [entity.id for entity in entities]
    for entity in entities:
        entity.relation = RelationTag(active=True, linked_ids=list(ids))

    logger.debug("Linked entities: %s", ", ".join(ids))
    emit(events, EventKind.ENTITIES_LINKED, world=world, entity_ids=ids)
    return True


def unlink(
    entity: Entity,
    *,
    events: EventPublisher | None = None,
    world: str | None = None,
) -> bool:
    """Clear the entity's link tag.

    Only this entity is cleared; former partners keep their tags.

    Returns:
        True if a link was cleared, False if the entity was not linked.
    """
    relation = entity.relation
    if relation is None or not relation.active:
        report(
            logger,
            NotFoundError(f"Entity '{entity.id}' is not linked"),
            events=events,
            world=world,
            entity_ids=[entity.id],
            operation="unlink",
        )
        return False

    former = list(relation.linked_ids)
    relation.clear()
    logger.debug("Unlinked entity %s", entity.id)
    emit(events, EventKind.ENTITY_UNLINKED, world=world, entity_ids=[entity.id], former=former)
    return True


def set_states(
    entity: Entity,
    states: Sequence[Any],
    initial_index: int = 0,
    *,
    events: EventPublisher | None = None,
    world: str | None = None,
) -> bool:
    """Give an entity a multi-state slot.

    ``initial_index`` must be an integer but is stored without a bounds
    check; an out-of-range index leaves ``current_value`` as None until
    set_current_index() picks a valid one.

    Args:
        entity: Entity to tag.
        states: Two or more candidate values.
        initial_index: Active index.
        events: Optional publisher for the outcome event.
        world: World name for attribution.

    Returns:
        True if assigned, False if rejected (fewer than two states or a
        non-integer index).
    """
    if not isinstance(states, Sequence) or isinstance(states, (str, bytes)) or len(states) < 2:
        report(
            logger,
            ValidationError(f"Multi-state slot requires at least two states for '{entity.id}'"),
            events=events,
            world=world,
            entity_ids=[entity.id],
            operation="set_states",
        )
        return False

    index = _as_index(initial_index)
    if index is None:
        report(
            logger,
            ValidationError(f"State index must be an integer, got {initial_index!r}"),
            events=events,
            world=world,
            entity_ids=[entity.id],
            operation="set_states",
        )
        return False

    entity.state_slot = StateSlot(values=list(states), index=index)
    logger.debug(
        "Assigned states %s to %s, current: %r",
        entity.state_slot.values,
        entity.id,
        entity.state_slot.current_value,
    )
    emit(
        events,
        EventKind.STATES_ASSIGNED,
        world=world,
        entity_ids=[entity.id],
        values=list(states),
        index=index,
    )
    return True


def set_current_index(
    entity: Entity,
    new_index: int,
    *,
    events: EventPublisher | None = None,
    world: str | None = None,
) -> bool:
    """Switch the active value of an existing multi-state slot.

    Returns:
        True if switched, False if the entity has no slot or the index is
        not an integer inside the slot.
    """
    slot = entity.state_slot
    index = _as_index(new_index)
    if slot is None or index is None or not slot.in_bounds(index):
        report(
            logger,
            ValidationError(f"Invalid state change for entity '{entity.id}' to index {new_index}"),
            events=events,
            world=world,
            entity_ids=[entity.id],
            operation="set_current_index",
        )
        return False

    previous = slot.current_value
    slot.index = index
    logger.debug("Changed state of %s to %r", entity.id, slot.current_value)
    emit(
        events,
        EventKind.STATE_CHANGED,
        world=world,
        entity_ids=[entity.id],
        previous=previous,
        current=slot.current_value,
        index=index,
    )
    return True


def attempt_crossing(
    subject: Entity,
    barrier: Entity,
    probability: float,
    *,
    rng: RandomSource | None = None,
    events: EventPublisher | None = None,
    world: str | None = None,
) -> CrossingOutcome:
    """Probabilistic pass/fail check of subject crossing barrier ("tunneling").

    Draws one uniform sample; succeeds when it is below ``probability``.
    Probabilities outside [0, 1] are accepted: <= 0 always fails, > 1 always
    succeeds. Neither entity is mutated.

    Args:
        subject: Entity attempting the crossing.
        barrier: Entity being crossed.
        probability: Success probability.
        rng: Random source; defaults to the ``random`` module.
        events: Optional publisher for the outcome event.
        world: World name for attribution.

    Returns:
        CrossingOutcome with success flag and description.
    """
    sample = (rng or random).random()
    success = sample < probability
    outcome = CrossingOutcome(
        success=success,
        description=CROSSING_SUCCESS if success else CROSSING_FAILURE,
    )
    if success:
        logger.debug(
            "Entity %s crosses %s with probability %s", subject.id, barrier.id, probability
        )
    emit(
        events,
        EventKind.CROSSING_ATTEMPTED,
        world=world,
        entity_ids=[subject.id, barrier.id],
        probability=probability,
        success=success,
    )
    return outcome
