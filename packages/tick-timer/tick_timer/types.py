"""Shared types, timer definitions and protocols for tick-timer."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Protocol

from tick_timer.bus import Event, EventFilter, _as_frozenset

DISPLAY_UPDATE = "display_update"
TIMER_COMPLETED = "timer_completed"


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    elapsed: float
    request_stop: Callable[[], None]
    random: _random.Random


System = Callable[[TickContext], None]


class LogicComponent(Protocol):
    """Capabilities a host loop needs to drive a logic component."""

    def initialize(self) -> None: ...

    def on_tick(self, dt: float) -> None: ...

    def on_event(self, event: Event) -> None: ...


class TimerPolicy(Enum):
    RESET = "reset"
    STOP = "stop"


class CountType(Enum):
    COUNT_UP = "count_up"
    COUNT_DOWN = "count_down"


class TimerConfigError(ValueError):
    """Raised when a timer definition cannot be built from config data."""


@dataclass(frozen=True)
class TimerDef:
    """Static configuration of a timer. Runtime state lives on Timer."""

    active: bool = True
    policy: TimerPolicy = TimerPolicy.STOP
    count_type: CountType = CountType.COUNT_UP
    duration: float = 2.0
    variance: float = 0.0
    start_delay: float = 0.0
    trigger: EventFilter = field(default_factory=EventFilter)
    display_receivers: frozenset[str] | None = None
    completed_receivers: frozenset[str] | None = None
    print_debug: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TimerDef:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise TimerConfigError(f"Unknown timer fields: {sorted(unknown)}")

        kwargs = dict(data)
        if "policy" in kwargs:
            kwargs["policy"] = _enum_member(TimerPolicy, kwargs["policy"])
        if "count_type" in kwargs:
            kwargs["count_type"] = _enum_member(CountType, kwargs["count_type"])
        for key in ("active", "print_debug"):
            if key in kwargs and not isinstance(kwargs[key], bool):
                raise TimerConfigError(
                    f"{key} must be a bool, got {kwargs[key]!r}"
                )
        for key in ("duration", "variance", "start_delay"):
            if key in kwargs:
                kwargs[key] = _seconds(key, kwargs[key])
        if "trigger" in kwargs:
            kwargs["trigger"] = _trigger_filter(kwargs["trigger"])
        for key in ("display_receivers", "completed_receivers"):
            if kwargs.get(key) is not None:
                kwargs[key] = _names(key, kwargs[key])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "policy": self.policy.name,
            "count_type": self.count_type.name,
            "duration": self.duration,
            "variance": self.variance,
            "start_delay": self.start_delay,
            "trigger": {
                "names": sorted(self.trigger.names),
                "senders": (
                    None
                    if self.trigger.senders is None
                    else sorted(self.trigger.senders)
                ),
            },
            "display_receivers": _sorted_or_none(self.display_receivers),
            "completed_receivers": _sorted_or_none(self.completed_receivers),
            "print_debug": self.print_debug,
        }


def _enum_member(enum_type: type[Enum], value: Any) -> Any:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type[value]
    except KeyError:
        raise TimerConfigError(
            f"Unknown {enum_type.__name__} {value!r}, expected one of "
            f"{[m.name for m in enum_type]}"
        ) from None


_TRIGGER_KEYS = frozenset({"names", "senders"})


def _trigger_filter(value: Any) -> EventFilter:
    if isinstance(value, EventFilter):
        return value
    if not isinstance(value, dict):
        raise TimerConfigError(
            f"trigger must be a dict or EventFilter, got {type(value).__name__}"
        )
    unknown = set(value) - _TRIGGER_KEYS
    if unknown:
        raise TimerConfigError(f"Unknown trigger fields: {sorted(unknown)}")
    senders = value.get("senders")
    return EventFilter(
        names=_names("trigger.names", value.get("names", ())),
        senders=None if senders is None else _names("trigger.senders", senders),
    )


def _names(key: str, value: Any) -> frozenset[str]:
    # A bare string is one name, as in EventFilter and EventBus.publish.
    try:
        names = _as_frozenset(value)
    except TypeError:
        raise TimerConfigError(
            f"{key} must be a string or a list of strings, got {value!r}"
        ) from None
    if not all(isinstance(name, str) for name in names):
        raise TimerConfigError(f"{key} must contain only strings, got {value!r}")
    return names


def _seconds(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TimerConfigError(f"{key} must be a number, got {value!r}")
    return float(value)


def _sorted_or_none(values: frozenset[str] | None) -> list[str] | None:
    if values is None:
        return None
    return sorted(values)
