"""Engine - driver loop, pacing, and lifecycle hooks."""

import os
import random
import time
from typing import Callable

from tick_timer.clock import Clock
from tick_timer.types import System, TickContext


class Engine:
    def __init__(self, tps: int = 20, seed: int | None = None) -> None:
        self._clock = Clock(tps)
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[TickContext], None]] = []
        self._stop_hooks: list[Callable[[TickContext], None]] = []
        self._stop_requested: bool = False
        self._started: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def rng(self) -> random.Random:
        """The engine's seeded random source, shared with every TickContext."""
        return self._rng

    @property
    def started(self) -> bool:
        return self._started

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[TickContext], None]) -> None:
        """Register a hook run once, before the first frame."""
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[TickContext], None]) -> None:
        """Register a hook run whenever run() or run_forever() returns."""
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _start(self) -> None:
        if self._started:
            return
        self._started = True
        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in self._start_hooks:
            hook(ctx)

    def _stop(self) -> None:
        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in self._stop_hooks:
            hook(ctx)

    def _tick(self, dt: float | None = None) -> None:
        self._clock.advance(dt)
        ctx = self._clock.context(self._request_stop, self._rng)
        for system in self._systems:
            system(ctx)
            if self._stop_requested:
                break

    def step(self, dt: float | None = None) -> None:
        """Advance one frame, by ``dt`` seconds or the clock's fixed delta."""
        self._stop_requested = False
        self._start()
        self._tick(dt)

    def run(self, n: int, dt: float | None = None) -> None:
        self._stop_requested = False
        self._start()

        for _ in range(n):
            self._tick(dt)
            if self._stop_requested:
                break

        self._stop()

    def run_forever(self) -> None:
        """Run in real time, feeding each frame its measured wall-clock delta."""
        self._stop_requested = False
        self._start()

        target = self._clock.default_dt
        last = time.monotonic()
        while not self._stop_requested:
            now = time.monotonic()
            frame_dt = now - last
            last = now
            self._tick(frame_dt)
            if self._stop_requested:
                break
            sleep_time = target - (time.monotonic() - now)
            if sleep_time > 0:
                time.sleep(sleep_time)

        self._stop()
