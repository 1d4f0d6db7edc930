"""System factories wiring delays, logic components and the bus into an Engine."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from tick_timer.bus import EventBus
    from tick_timer.delay import DelayScheduler
    from tick_timer.types import LogicComponent, System, TickContext


def make_delay_system(scheduler: DelayScheduler) -> System:
    """Return a system that advances the scheduler by each frame's delta."""

    def delay_system(ctx: TickContext) -> None:
        scheduler.advance(ctx.dt)

    return delay_system


def make_logic_system(components: Iterable[LogicComponent]) -> System:
    """Return a system that ticks every component once per frame.

    ``components`` is read each frame, so a list may grow after wiring.
    """

    def logic_system(ctx: TickContext) -> None:
        for component in list(components):
            component.on_tick(ctx.dt)

    return logic_system


def make_bus_system(bus: EventBus) -> System:
    def bus_system(ctx: TickContext) -> None:
        bus.flush()

    return bus_system
