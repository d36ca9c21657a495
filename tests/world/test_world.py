"""Tests for World creation and the change protocol.

Critical Invariants:
- Entity ids are unique within a World
- Rejected changes leave the World unchanged and the batch continues
- Removing an absent id is a no-op
- Modify is a shallow merge into an existing entity
- Markers are append-only and capture the clock state
"""

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ctrlxt import (
    DuplicateError,
    EventBus,
    EventKind,
    NotFoundError,
    RecordingSink,
    TimeState,
    ValidationError,
    Vector3,
    World,
    WorldSettings,
    apply_changes,
    create_default_world,
    create_world,
)
from ctrlxt.core.change import AddChange, ChangeKind, RemoveChange
from ctrlxt.core.entity import Entity


def test_create_world_defaults(world: World) -> None:
    assert world.name == "test"
    assert world.dimensions == Vector3(10, 10, 10)
    assert world.configuration.composition == "TestComposition"
    assert world.configuration.processing_model == "TestModel"
    assert world.configuration.data_sources == ("TestSource",)
    assert world.entities == []
    assert world.markers == ()
    assert world.time_state is TimeState.PLAY
    assert world.time_speed == 1.0
    assert world.zero_point.frequency == 0.0
    assert world.zero_point.coordinates == Vector3()


def test_create_world_publishes_creation_event() -> None:
    bus = EventBus()
    sink = RecordingSink()
    bus.subscribe(sink)

    create_world([5, 5, 5], "C", "M", ["S1", "S2"], name="dev", events=bus)

    event = sink.of_kind(EventKind.WORLD_CREATED)[0]
    assert event.world == "dev"
    assert event.data["dimensions"] == {"x": 5.0, "y": 5.0, "z": 5.0}
    assert event.data["data_sources"] == ["S1", "S2"]


def test_create_world_logs(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="ctrlxt.world.world"):
        create_world({"x": 1, "y": 1, "z": 1}, "Comp", "Model", name="dev")

    assert "Created world 'dev': composition=Comp, processing model=Model" in caplog.text


def test_create_world_rejects_bad_dimensions() -> None:
    with pytest.raises(ValueError):
        create_world("huge")


def test_default_world_uses_settings() -> None:
    world_settings = WorldSettings(default_dimensions=(1, 2, 3), composition="Fallback")

    world = create_default_world(world_settings, name="restored")

    assert world.dimensions == Vector3(1, 2, 3)
    assert world.configuration.composition == "Fallback"
    assert world.configuration.processing_model == "default"
    assert len(world) == 0


def test_worlds_are_isolated() -> None:
    first = create_world([10, 10, 10])
    second = create_world([10, 10, 10])

    first.apply_changes([{"type": "add", "object": {"id": "p1"}}])

    assert "p1" in first
    assert "p1" not in second


# Add


def test_add_entity(world: World, recorder: RecordingSink) -> None:
    report = world.apply_changes(
        [{"type": "add", "object": {"id": "devObj1", "position": {"x": 5, "y": 5}}}]
    )

    assert report.ok
    entity = world.get("devObj1")
    assert entity is not None
    assert entity.properties == {"position": {"x": 5, "y": 5}}
    assert recorder.of_kind(EventKind.ENTITY_ADDED)[0].entity_ids == ("devObj1",)


def test_add_duplicate_is_rejected_and_original_kept(
    world: World, recorder: RecordingSink
) -> None:
    world.apply_changes([{"type": "add", "object": {"id": "p1", "hp": 10}}])

    report = world.apply_changes([{"type": "add", "object": {"id": "p1", "hp": 0}}])

    assert not report.ok
    assert isinstance(report.rejected[0].error, DuplicateError)
    assert world.get("p1").properties == {"hp": 10}
    assert len(world) == 1
    rejection = recorder.of_kind(EventKind.CHANGE_REJECTED)[0]
    assert rejection.data["error"] == "DuplicateError"
    assert "Skipping addition" in rejection.data["reason"]


@pytest.mark.parametrize(
    "record",
    [{"type": "add"}, {"type": "add", "object": {"color": "blue"}}, {"type": "add", "object": 5}],
    ids=["no-object", "no-id", "not-a-mapping"],
)
def test_add_without_id_is_rejected(world: World, record: dict) -> None:
    report = world.apply_changes([record])

    assert isinstance(report.rejected[0].error, ValidationError)
    assert len(world) == 0


def test_add_typed_change(world: World) -> None:
    entity = Entity("typed", {"kind": "rock"})

    world.apply_changes([AddChange(entity)])

    assert world.get("typed") is entity


# Remove


def test_remove_entity(populated: World, recorder: RecordingSink) -> None:
    report = populated.apply_changes([{"type": "remove", "targetId": "b"}])

    assert report.ok
    assert populated.entity_ids() == ["a", "c"]
    assert recorder.of_kind(EventKind.ENTITY_REMOVED)[0].entity_ids == ("b",)


def test_remove_absent_is_noop(populated: World, recorder: RecordingSink) -> None:
    report = populated.apply_changes([RemoveChange("ghost"), RemoveChange("ghost")])

    assert report.ok
    assert populated.entity_ids() == ["a", "b", "c"]
    assert recorder.of_kind(EventKind.ENTITY_REMOVED) == []


def test_remove_without_target_is_rejected(populated: World) -> None:
    report = populated.apply_changes([{"type": "remove"}])

    assert isinstance(report.rejected[0].error, ValidationError)
    assert len(populated) == 3


# Modify


def test_modify_merges_properties(world: World, recorder: RecordingSink) -> None:
    world.apply_changes([{"type": "add", "object": {"id": "p1", "color": "blue", "hp": 10}}])

    report = world.apply_changes(
        [{"type": "modify", "targetId": "p1", "properties": {"color": "red", "size": 10}}]
    )

    assert report.ok
    assert world.get("p1").properties == {"color": "red", "hp": 10, "size": 10}
    event = recorder.of_kind(EventKind.ENTITY_MODIFIED)[0]
    assert event.data["properties"] == {"color": "red", "size": 10}


def test_modify_missing_entity_is_rejected(populated: World) -> None:
    report = populated.apply_changes(
        [{"type": "modify", "targetId": "ghost", "properties": {"x": 1}}]
    )

    assert isinstance(report.rejected[0].error, NotFoundError)
    assert "ghost" not in populated


@pytest.mark.parametrize(
    "record",
    [
        {"type": "modify", "properties": {"x": 1}},
        {"type": "modify", "targetId": "a"},
        {"type": "modify", "targetId": "a", "properties": "x=1"},
    ],
    ids=["no-target", "no-properties", "bad-properties"],
)
def test_modify_incomplete_is_rejected(populated: World, record: dict) -> None:
    report = populated.apply_changes([record])

    assert isinstance(report.rejected[0].error, ValidationError)
    assert populated.get("a").properties == {"color": "red"}


# Markers


def test_create_marker_captures_time_state(world: World, recorder: RecordingSink) -> None:
    world.set_time_state("PAUSE")

    report = world.apply_changes(
        [{"type": "createBlinkSpot", "coordinates": {"x": 20, "y": 30, "z": 0}}]
    )

    assert report.ok
    marker = world.markers[0]
    assert marker.id == "marker-0"
    assert marker.coordinates == Vector3(20, 30, 0)
    assert marker.time_state is TimeState.PAUSE
    assert recorder.of_kind(EventKind.MARKER_CREATED)[0].data["time_state"] == "PAUSE"


def test_markers_are_appended_in_order(world: World) -> None:
    world.apply_changes(
        [
            {"type": "createBlinkSpot", "coordinates": [1, 1, 1]},
            {"type": "create_marker", "coordinates": {"x": 2, "y": 2}},
        ]
    )

    assert [marker.id for marker in world.markers] == ["marker-0", "marker-1"]
    assert world.markers[1].coordinates == Vector3(2, 2, 0)


@pytest.mark.parametrize(
    "coordinates",
    [None, "here", {"x": "far"}, {"x": 1, "w": 2}, [1], [1, 2, 3, 4], {"x": True}],
)
def test_create_marker_invalid_coordinates(world: World, coordinates: object) -> None:
    report = world.apply_changes([{"type": "createBlinkSpot", "coordinates": coordinates}])

    assert isinstance(report.rejected[0].error, ValidationError)
    assert world.markers == ()


# Batches


def test_unknown_change_type_is_rejected(world: World, recorder: RecordingSink) -> None:
    report = world.apply_changes([{"type": "explode", "targetId": "p1"}])

    outcome = report.rejected[0]
    assert outcome.kind is None
    assert "Unknown change type: 'explode'" in str(outcome.error)
    assert recorder.of_kind(EventKind.CHANGE_REJECTED)[0].data["change_type"] == "'explode'"


def test_batch_continues_after_rejection(world: World) -> None:
    report = world.apply_changes(
        [
            {"type": "add", "object": {"id": "p1"}},
            {"type": "add", "object": {"id": "p1"}},
            {"type": "modify", "targetId": "p1", "properties": {"hp": 3}},
            {"type": "unknown"},
            {"type": "remove", "targetId": "p1"},
        ]
    )

    assert [outcome.ok for outcome in report.outcomes] == [True, False, True, False, True]
    assert [outcome.index for outcome in report.rejected] == [1, 3]
    assert len(world) == 0


def test_failing_subscriber_does_not_abort_batch(
    world: World, recorder: RecordingSink
) -> None:
    def explode(event: object) -> None:
        raise RuntimeError("sink down")

    world.events.subscribe(explode, kinds=[EventKind.ENTITY_ADDED])

    report = world.apply_changes(
        [{"type": "add", "object": {"id": "a"}}, {"type": "add", "object": {"id": "b"}}]
    )

    assert report.ok
    assert len(report) == 2
    assert world.entity_ids() == ["a", "b"]
    assert len(recorder.of_kind(EventKind.ENTITY_ADDED)) == 2


def test_later_changes_see_earlier_effects(world: World) -> None:
    report = world.apply_changes(
        [
            {"type": "add", "object": {"id": "p1"}},
            {"type": "modify", "targetId": "p1", "properties": {"hp": 1}},
        ]
    )

    assert report.ok
    assert world.get("p1").properties == {"hp": 1}


def test_rejection_logged_at_error_class_level(
    world: World, caplog: pytest.LogCaptureFixture
) -> None:
    world.apply_changes([{"type": "add", "object": {"id": "p1"}}])

    with caplog.at_level(logging.DEBUG, logger="ctrlxt.world.world"):
        world.apply_changes([{"type": "add", "object": {"id": "p1"}}, {"type": "nope"}])

    levels = [record.levelno for record in caplog.records if record.levelno >= logging.WARNING]
    assert levels == [logging.WARNING, logging.ERROR]
    assert "[test] DuplicateError" in caplog.text


def test_module_level_apply_changes(world: World) -> None:
    report = apply_changes(world, [{"type": "add", "object": {"id": "p1"}}])

    assert report.applied[0].kind is ChangeKind.ADD
    assert report.applied[0].target_id == "p1"


def test_repr(populated: World) -> None:
    assert repr(populated) == "<World 'test' entities=3 markers=0 time=PLAYx1>"


# Relation and state operations through the World


def test_link_and_unlink_by_id(populated: World, recorder: RecordingSink) -> None:
    assert populated.link("a", "b") is True
    assert populated.get("a").linked_ids == ["a", "b"]

    assert populated.unlink("a") is True
    assert not populated.get("a").is_linked
    assert populated.get("b").is_linked
    assert recorder.kinds[-2:] == [EventKind.ENTITIES_LINKED, EventKind.ENTITY_UNLINKED]


def test_link_with_missing_id_is_rejected(populated: World, recorder: RecordingSink) -> None:
    assert populated.link("a", "ghost") is False

    assert populated.get("a").relation is None
    event = recorder.of_kind(EventKind.OPERATION_REJECTED)[0]
    assert event.entity_ids == ("ghost",)
    assert event.data["operation"] == "link"


def test_states_by_id(populated: World) -> None:
    assert populated.set_states("c", ["red", "green", "blue"], initial_index=1) is True
    assert populated.get("c").current_state == "green"

    assert populated.set_current_index("c", 99) is False
    assert populated.get("c").current_state == "green"

    assert populated.set_current_index("c", 0) is True
    assert populated.get("c").current_state == "red"


def test_attempt_crossing_by_id(populated: World, fixed_random) -> None:
    outcome = populated.attempt_crossing("a", "b", 0.5, rng=fixed_random(0.1))

    assert outcome is not None and outcome.success
    assert populated.attempt_crossing("a", "ghost", 0.5) is None


# Properties


_ids = st.text(alphabet="abcdef", min_size=1, max_size=3)
_records = st.lists(
    st.one_of(
        st.builds(lambda i: {"type": "add", "object": {"id": i}}, _ids),
        st.builds(lambda i: {"type": "remove", "targetId": i}, _ids),
        st.builds(lambda i: {"type": "modify", "targetId": i, "properties": {"n": 1}}, _ids),
    ),
    max_size=30,
)


@given(records=_records)
@settings(max_examples=50)
def test_ids_stay_unique_for_any_batch(records: list[dict]) -> None:
    world = create_world([1, 1, 1])

    world.apply_changes(records)

    ids = world.entity_ids()
    assert len(ids) == len(set(ids))
    assert all(entity.id for entity in world)


@given(records=_records)
@settings(max_examples=50)
def test_batch_matches_sequential_application(records: list[dict]) -> None:
    """A batch has the same effect as applying its changes one at a time."""
    batched = create_world([1, 1, 1])
    sequential = create_world([1, 1, 1])

    batched.apply_changes(records)
    for record in records:
        sequential.apply_changes([record])

    assert [(e.id, e.properties) for e in batched] == [(e.id, e.properties) for e in sequential]
