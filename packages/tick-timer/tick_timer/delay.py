"""DelayScheduler - fire-and-forget callbacks against simulation time."""
from __future__ import annotations

import heapq
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class DelayScheduler:
    """Runs callbacks once a given amount of simulation time has passed.

    Scheduled callbacks carry no handle and cannot be cancelled. Two
    overlapping requests run independently; whichever comes due last has
    the final say over any state they both touch.
    """

    def __init__(self) -> None:
        self._now: float = 0.0
        self._counter: int = 0
        self._pending: list[tuple[float, int, Callable[[], None]]] = []

    @property
    def now(self) -> float:
        return self._now

    def schedule(self, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` on the first advance that reaches now + delay.

        A zero or negative delay runs on the next advance.
        """
        due = self._now + delay
        heapq.heappush(self._pending, (due, self._counter, callback))
        self._counter += 1
        logger.debug("scheduled callback due at %.4f (now %.4f)", due, self._now)

    def advance(self, dt: float) -> int:
        """Move time forward by ``dt`` and run everything due. Returns count run."""
        self._now += dt
        due: list[Callable[[], None]] = []
        while self._pending and self._pending[0][0] <= self._now:
            _, _, callback = heapq.heappop(self._pending)
            due.append(callback)
        # Callbacks scheduled from inside these wait for the next advance.
        for callback in due:
            callback()
        return len(due)

    def pending(self) -> int:
        return len(self._pending)

    def clear(self) -> None:
        self._pending.clear()
