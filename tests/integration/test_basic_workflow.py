"""Integration tests for end-to-end world workflows."""

from ctrlxt import (
    AccessViolationError,
    ChangePolicy,
    EventBus,
    EventKind,
    LoggingSink,
    RecordingSink,
    ScopedWorld,
    TimeState,
    create_world,
    restore,
)


def test_add_modify_remove_in_one_batch() -> None:
    """Modify lands before removal; final entity set is empty."""
    world = create_world({"x": 10, "y": 10, "z": 10})
    sink = RecordingSink()
    world.events.subscribe(sink)

    report = world.apply_changes(
        [
            {"type": "add", "object": {"id": "p1"}},
            {"type": "modify", "targetId": "p1", "properties": {"hp": 10}},
            {"type": "remove", "targetId": "p1"},
        ]
    )

    assert report.ok
    assert world.entities == []
    assert sink.kinds == [
        EventKind.ENTITY_ADDED,
        EventKind.ENTITY_MODIFIED,
        EventKind.ENTITY_REMOVED,
    ]


def test_developer_and_player_worlds() -> None:
    """Two independently owned worlds sharing one event bus."""
    bus = EventBus()
    sink = RecordingSink()
    bus.subscribe(sink)
    bus.subscribe(LoggingSink())

    developer = create_world(
        {"x": 100, "y": 100, "z": 100},
        "CosmicDustEntanglement",
        "BioQuantumEntangled",
        ["QuantumGPS"],
        name="developer",
        events=bus,
    )
    player_world = create_world(
        {"x": 100, "y": 100, "z": 100},
        "CosmicDustEntanglement",
        "BioQuantumEntangled",
        ["QuantumGPS"],
        name="player",
        events=bus,
    )
    player = ScopedWorld(player_world, ChangePolicy.add_only())

    developer.apply_changes(
        [
            {"type": "add", "object": {"id": "devObj1", "position": {"x": 5, "y": 5}}},
            {"type": "createBlinkSpot", "coordinates": {"x": 20, "y": 30, "z": 0}},
        ]
    )
    developer.set_time_state("FAST FORWARD", 2)
    player.apply_changes([{"type": "add", "object": {"id": "playerObj1", "color": "blue"}}])
    report = player.apply_changes([{"type": "remove", "targetId": "playerObj1"}])

    assert developer.entity_ids() == ["devObj1"]
    assert player_world.entity_ids() == ["playerObj1"]
    assert isinstance(report.rejected[0].error, AccessViolationError)
    assert developer.time_state is TimeState.FAST_FORWARD
    assert player_world.time_state is TimeState.PLAY
    assert {event.world for event in sink.events} == {"developer", "player"}


def test_entangle_superpose_tunnel_then_snapshot(fixed_random) -> None:
    world = create_world([100, 100, 100], name="lab")
    world.apply_changes(
        [
            {"type": "add", "object": {"id": "A", "position": {"x": 0, "y": 0}}},
            {"type": "add", "object": {"id": "B", "position": {"x": 10, "y": 0}}},
            {"type": "add", "object": {"id": "C", "color": "red"}},
            {"type": "add", "object": {"id": "Player", "type": "entity"}},
            {"type": "add", "object": {"id": "Wall", "type": "barrier"}},
        ]
    )

    assert world.link("A", "B")
    assert world.set_states("C", ["red", "green", "blue"], initial_index=1)
    assert not world.set_current_index("C", 99)
    outcome = world.attempt_crossing("Player", "Wall", 0.2, rng=fixed_random(0.15))

    assert outcome is not None and outcome.success
    assert outcome.description == "Quantum Tunneling Event"

    restored = restore(world.snapshot())
    assert restored.get("A").linked_ids == ["A", "B"]
    assert restored.get("C").current_state == "green"
    assert restored.get("Player").properties == {"type": "entity"}


def test_corrupt_snapshot_then_continue() -> None:
    world = restore("corrupt data")

    report = world.apply_changes([{"type": "add", "object": {"id": "fresh"}}])

    assert report.ok
    assert world.entity_ids() == ["fresh"]
