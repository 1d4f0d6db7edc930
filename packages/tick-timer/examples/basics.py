"""Timers -- a fuse, a blinker and a triggered countdown.

Demonstrates:
- Configuring timers with TimerDef (and from a plain dict)
- Wiring the delay, logic and bus systems into an Engine
- Listening for display_update and timer_completed events
- Re-arming a stopped timer with a trigger event

Run: python -m examples.basics
"""

import logging

from tick_timer import (
    DISPLAY_UPDATE,
    TIMER_COMPLETED,
    CountType,
    DelayScheduler,
    Engine,
    Event,
    EventBus,
    EventFilter,
    Timer,
    TimerDef,
    TimerPolicy,
    make_bus_system,
    make_delay_system,
    make_logic_system,
)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="  [%(name)s] %(message)s")
    print("=== Timers ===\n")

    engine = Engine(tps=4, seed=42)
    bus = EventBus()
    delays = DelayScheduler()

    # Counts up to 1s once, then stops.
    fuse = Timer(TimerDef(duration=1.0), bus, delays, engine.rng, owner="fuse")

    # Fires every 0.5s +/- 0.25s, forever.
    blinker = Timer(
        TimerDef(duration=0.5, variance=0.25, policy=TimerPolicy.RESET),
        bus,
        delays,
        engine.rng,
        owner="blinker",
    )

    # Sleeps until the fuse completes, then counts down 0.75s with trace output.
    bomb = Timer(
        TimerDef.from_dict(
            {
                "active": False,
                "count_type": CountType.COUNT_DOWN.name,
                "duration": 0.75,
                "trigger": {"names": [TIMER_COMPLETED], "senders": ["fuse"]},
                "print_debug": True,
            }
        ),
        bus,
        delays,
        engine.rng,
        owner="bomb",
    )
    timers = [fuse, blinker, bomb]

    def on_display(event: Event) -> None:
        if event.sender == "fuse":
            print(
                f"  tick {engine.clock.tick_number:2d}  fuse "
                f"{event.data['current']:.2f}/{event.data['target']:.2f}"
            )

    def on_completed(event: Event) -> None:
        print(f"  tick {engine.clock.tick_number:2d}  ** {event.sender} completed **")

    bus.subscribe(DISPLAY_UPDATE, on_display)
    bus.subscribe(TIMER_COMPLETED, on_completed)

    engine.on_start(lambda ctx: [t.initialize() for t in timers])
    engine.add_system(make_delay_system(delays))
    engine.add_system(make_logic_system(timers))
    engine.add_system(make_bus_system(bus))

    engine.run(12)

    print(f"\nDone at {engine.clock.elapsed:.2f}s. Bomb state: {bomb.snapshot()}")


if __name__ == "__main__":
    main()
