"""In-memory pub/sub event bus with receiver addressing and per-frame flush."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable


@dataclass(frozen=True)
class Event:
    """A published notification. ``receivers=None`` addresses everyone."""

    name: str
    sender: str | None = None
    receivers: frozenset[str] | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class EventFilter:
    """Selects events by name, sender and addressing."""

    names: frozenset[str] = frozenset()
    senders: frozenset[str] | None = None

    def __post_init__(self) -> None:
        # Accept any iterable of names; a bare string is one name.
        object.__setattr__(self, "names", _as_frozenset(self.names))
        if self.senders is not None:
            object.__setattr__(self, "senders", _as_frozenset(self.senders))

    def matches(self, event: Event, receiver: str | None = None) -> bool:
        if event.name not in self.names:
            return False
        if self.senders is not None and event.sender not in self.senders:
            return False
        if event.receivers is not None and receiver not in event.receivers:
            return False
        return True


def _as_frozenset(values: str | Iterable[str]) -> frozenset[str]:
    if isinstance(values, str):
        return frozenset((values,))
    return frozenset(values)


_Handler = Callable[[Event], None]


class EventBus:

    def __init__(self) -> None:
        self._subscribers: dict[str, list[tuple[_Handler, str | None]]] = {}
        self._queue: list[Event] = []

    def subscribe(
        self, event_name: str, handler: _Handler, receiver: str | None = None
    ) -> None:
        """Register a handler. With ``receiver`` set, only events addressed
        to that receiver (or broadcast) are delivered."""
        self._subscribers.setdefault(event_name, []).append((handler, receiver))

    def unsubscribe(self, event_name: str, handler: _Handler) -> None:
        entries = self._subscribers.get(event_name)
        if entries is None:
            return
        entries[:] = [entry for entry in entries if entry[0] != handler]

    def publish(
        self,
        event_name: str,
        sender: str | None = None,
        receivers: Iterable[str] | None = None,
        **data: Any,
    ) -> Event:
        event = Event(
            name=event_name,
            sender=sender,
            receivers=None if receivers is None else _as_frozenset(receivers),
            data=data,
        )
        self._queue.append(event)
        return event

    def post(self, event: Event) -> None:
        self._queue.append(event)

    def pending(self) -> list[Event]:
        return list(self._queue)

    def flush(self) -> None:
        snapshot = self._queue
        self._queue = []
        for event in snapshot:
            for handler, receiver in list(self._subscribers.get(event.name, [])):
                if (
                    receiver is not None
                    and event.receivers is not None
                    and receiver not in event.receivers
                ):
                    continue
                handler(event)

    def clear(self) -> None:
        self._queue.clear()
