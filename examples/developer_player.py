"""Two worlds side by side: an unrestricted developer world and an add-only player world."""

from ctrlxt import (
    ChangePolicy,
    EventBus,
    LoggingSink,
    LoggingSettings,
    ScopedWorld,
    configure_logging,
    create_world,
    restore,
)


def main() -> None:
    configure_logging(LoggingSettings(level="INFO"))
    bus = EventBus()
    bus.subscribe(LoggingSink())

    developer = create_world(
        {"x": 100, "y": 100, "z": 100},
        "CosmicDustEntanglement",
        "BioQuantumEntangled",
        ["QuantumGPS"],
        name="developer",
        events=bus,
    )
    player = ScopedWorld(
        create_world({"x": 100, "y": 100, "z": 100}, name="player", events=bus),
        ChangePolicy.add_only(),
    )

    developer.apply_changes(
        [
            {"type": "add", "object": {"id": "devObj1", "position": {"x": 5, "y": 5}}},
            {"type": "add", "object": {"id": "devObj2", "position": {"x": 10, "y": 0}}},
            {"type": "modify", "targetId": "devObj1", "properties": {"color": "red"}},
            {"type": "createBlinkSpot", "coordinates": {"x": 20, "y": 30, "z": 0}},
        ]
    )
    developer.set_time_state("FAST FORWARD", speed=2)
    developer.link("devObj1", "devObj2")
    developer.set_states("devObj2", ["red", "green", "blue"], initial_index=1)

    outcome = developer.attempt_crossing("devObj1", "devObj2", 0.5)
    print(f"Crossing: {outcome.description if outcome else 'n/a'}")

    player.apply_changes([{"type": "add", "object": {"id": "playerObj1", "color": "blue"}}])
    # Rejected: the player policy only allows additions
    player.apply_changes([{"type": "remove", "targetId": "playerObj1"}])

    copy = restore(developer.snapshot())
    print(f"Restored: {copy!r}")
    print(f"Player: {player.world!r}")


if __name__ == "__main__":
    main()
