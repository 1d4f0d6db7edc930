"""Frame clock and TickContext for the driver loop."""

import random
from typing import Callable

from tick_timer.types import TickContext


class Clock:
    """Counts frames and accumulates simulation time.

    Each frame advances by the fixed ``1 / tps`` delta unless the caller
    supplies the frame's own delta.
    """

    def __init__(self, tps: int) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._default_dt = 1.0 / tps
        self._dt = self._default_dt
        self._tick_number = 0
        self._elapsed = 0.0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        """Delta of the most recent frame (the default delta before any)."""
        return self._dt

    @property
    def default_dt(self) -> float:
        return self._default_dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed(self) -> float:
        return self._elapsed

    def advance(self, dt: float | None = None) -> int:
        if dt is None:
            dt = self._default_dt
        elif dt < 0:
            raise ValueError(f"frame delta must be non-negative, got {dt}")
        self._dt = dt
        self._elapsed += dt
        self._tick_number += 1
        return self._tick_number

    def context(self, stop_fn: Callable[[], None], rng: random.Random) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            dt=self._dt,
            elapsed=self._elapsed,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self, tick_number: int = 0, elapsed: float = 0.0) -> None:
        self._tick_number = tick_number
        self._elapsed = elapsed
        self._dt = self._default_dt
