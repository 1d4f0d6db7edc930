"""tick-timer - Frame-driven count-up/count-down timer component."""
from __future__ import annotations

from tick_timer.bus import Event, EventBus, EventFilter
from tick_timer.clock import Clock
from tick_timer.delay import DelayScheduler
from tick_timer.engine import Engine
from tick_timer.systems import make_bus_system, make_delay_system, make_logic_system
from tick_timer.timer import Timer
from tick_timer.types import (
    DISPLAY_UPDATE,
    TIMER_COMPLETED,
    CountType,
    LogicComponent,
    TickContext,
    TimerConfigError,
    TimerDef,
    TimerPolicy,
)

__all__ = [
    "Engine",
    "Clock",
    "TickContext",
    "Event",
    "EventBus",
    "EventFilter",
    "DelayScheduler",
    "Timer",
    "TimerDef",
    "TimerPolicy",
    "CountType",
    "TimerConfigError",
    "LogicComponent",
    "DISPLAY_UPDATE",
    "TIMER_COMPLETED",
    "make_delay_system",
    "make_logic_system",
    "make_bus_system",
]
