"""Timer - counts up or down each frame and announces progress and completion."""
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any

from tick_timer.types import (
    DISPLAY_UPDATE,
    TIMER_COMPLETED,
    CountType,
    TimerDef,
    TimerPolicy,
)

if TYPE_CHECKING:
    from tick_timer.bus import Event, EventBus
    from tick_timer.delay import DelayScheduler

logger = logging.getLogger(__name__)


class Timer:
    """Tracks time against a (possibly jittered) goal.

    Starts paused. ``initialize()`` computes the first goal and, for an
    active timer, arms it after the start delay. Every unpaused tick
    publishes a ``display_update`` event with ``current`` and ``target``;
    reaching the goal publishes ``timer_completed`` and then either resets
    (``TimerPolicy.RESET``) or pauses until the next trigger event
    (``TimerPolicy.STOP``).
    """

    def __init__(
        self,
        definition: TimerDef,
        bus: EventBus,
        delays: DelayScheduler,
        rng: random.Random | None = None,
        owner: str = "timer",
    ) -> None:
        self._def = definition
        self._bus = bus
        self._delays = delays
        self._rng = rng if rng is not None else random.Random()
        self._owner = owner

        self.current_time: float = 0.0
        self.current_goal: float = 0.0
        self.paused: bool = True
        self._initialized: bool = False

    @property
    def definition(self) -> TimerDef:
        return self._def

    @property
    def owner(self) -> str:
        return self._owner

    # --- Lifecycle ---

    def initialize(self) -> None:
        """Run once; later calls are ignored."""
        if self._initialized:
            return
        self._initialized = True

        for name in sorted(self._def.trigger.names):
            self._bus.subscribe(name, self.on_event)

        self.set_goal()

        if not self._def.active:
            return

        self.arm_after_delay(self._def.start_delay)

    def on_event(self, event: Event) -> None:
        if not self._def.trigger.matches(event, self._owner):
            return

        self.arm_after_delay(self._def.start_delay)

        if self._def.count_type is CountType.COUNT_DOWN:
            self.set_goal()

    def on_tick(self, dt: float) -> None:
        if self.paused:
            return

        if self._def.count_type is CountType.COUNT_UP:
            self.current_time += dt
        else:
            self.current_time -= dt

        self._bus.publish(
            DISPLAY_UPDATE,
            sender=self._owner,
            receivers=self._def.display_receivers,
            current=self.current_time,
            target=self._def.duration,
        )

        if self._def.print_debug:
            logger.debug("%s: Timer: %s", self._owner, self.current_time)

        if self._reached_goal():
            self._complete()

    # --- Goal and arming ---

    def set_goal(self) -> None:
        """Roll the goal for a new cycle: duration +/- variance."""
        goal = self._def.duration + self._rng.uniform(
            -self._def.variance, self._def.variance
        )
        if self._def.count_type is CountType.COUNT_UP:
            self.current_goal = goal
        else:
            self.current_time = goal

    def arm_after_delay(self, delay: float) -> None:
        self._delays.schedule(delay, self._arm)

    def _arm(self) -> None:
        self.paused = False

    def _reached_goal(self) -> bool:
        if self._def.count_type is CountType.COUNT_UP:
            return self.current_time >= self.current_goal
        return self.current_time <= 0

    def _complete(self) -> None:
        self._bus.publish(
            TIMER_COMPLETED,
            sender=self._owner,
            receivers=self._def.completed_receivers,
        )

        if self._def.print_debug:
            logger.debug("%s: Timer Completed", self._owner)

        if self._def.policy is TimerPolicy.RESET:
            self.current_time = 0.0
            self.set_goal()
        else:
            self.paused = True

    # --- Snapshot / restore ---

    def snapshot(self) -> dict[str, Any]:
        """Serialize runtime state. Pending delayed arms are not included."""
        return {
            "current_time": self.current_time,
            "current_goal": self.current_goal,
            "paused": self.paused,
        }

    def restore(self, data: dict[str, Any]) -> None:
        current_time = data["current_time"]
        current_goal = data["current_goal"]
        paused = data["paused"]
        self.current_time = current_time
        self.current_goal = current_goal
        self.paused = paused
