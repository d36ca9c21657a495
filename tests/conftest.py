"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from ctrlxt import Entity, RecordingSink, World, create_world


@pytest.fixture
def world() -> World:
    """Fresh named World instance."""
    return create_world(
        {"x": 10, "y": 10, "z": 10},
        "TestComposition",
        "TestModel",
        ["TestSource"],
        name="test",
    )


@pytest.fixture
def recorder(world: World) -> RecordingSink:
    """RecordingSink subscribed to the world fixture's event bus."""
    sink = RecordingSink()
    world.events.subscribe(sink)
    return sink


@pytest.fixture
def populated(world: World) -> World:
    """World with three entities: a, b, c."""
    world.apply_changes(
        [
            {"type": "add", "object": {"id": "a", "color": "red"}},
            {"type": "add", "object": {"id": "b", "color": "green"}},
            {"type": "add", "object": {"id": "c", "color": "blue"}},
        ]
    )
    return world


class FixedRandom:
    """Random source returning a fixed sample."""

    def __init__(self, sample: float):
        self.sample = sample
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.sample


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def entity_pair() -> tuple[Entity, Entity]:
    return Entity("A", {"position": {"x": 0, "y": 0}}), Entity("B", {"position": {"x": 10, "y": 0}})
