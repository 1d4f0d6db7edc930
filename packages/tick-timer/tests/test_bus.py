"""Unit tests for EventBus, Event and EventFilter."""
from __future__ import annotations

from tick_timer.bus import Event, EventBus, EventFilter


def test_subscribe_and_flush():
    """Subscribe handler, publish event, flush dispatches to handler."""
    bus = EventBus()
    received = []

    bus.subscribe("door_opened", received.append)
    bus.publish("door_opened", sender="door", value=42)
    bus.flush()

    assert received == [Event(name="door_opened", sender="door", data={"value": 42})]


def test_publish_without_subscribers():
    bus = EventBus()
    bus.publish("nobody_listens", value=1)
    bus.flush()  # Should not raise
    assert bus.pending() == []


def test_publish_is_deferred_until_flush():
    bus = EventBus()
    received = []
    bus.subscribe("ping", received.append)

    event = bus.publish("ping")
    assert received == []
    assert bus.pending() == [event]

    bus.flush()
    assert received == [event]
    assert bus.pending() == []


def test_fifo_ordering_across_names():
    bus = EventBus()
    order = []

    def handler(event: Event) -> None:
        order.append(event.name)

    bus.subscribe("a", handler)
    bus.subscribe("b", handler)
    bus.publish("a")
    bus.publish("b")
    bus.publish("a")
    bus.flush()

    assert order == ["a", "b", "a"]


def test_handlers_called_in_registration_order():
    bus = EventBus()
    order = []

    bus.subscribe("evt", lambda e: order.append("first"))
    bus.subscribe("evt", lambda e: order.append("second"))
    bus.publish("evt")
    bus.flush()

    assert order == ["first", "second"]


def test_unsubscribe():
    bus = EventBus()
    received = []

    bus.subscribe("evt", received.append)
    bus.unsubscribe("evt", received.append)
    bus.publish("evt")
    bus.flush()

    assert received == []


def test_unsubscribe_unknown_is_noop():
    bus = EventBus()
    bus.unsubscribe("never_subscribed", lambda e: None)


def test_events_published_during_flush_wait_for_next_flush():
    bus = EventBus()
    received = []

    def relay(event: Event) -> None:
        bus.publish("second")

    bus.subscribe("first", relay)
    bus.subscribe("second", received.append)

    bus.publish("first")
    bus.flush()
    assert received == []

    bus.flush()
    assert [e.name for e in received] == ["second"]


def test_clear_drops_queued_events():
    bus = EventBus()
    received = []
    bus.subscribe("evt", received.append)

    bus.publish("evt")
    bus.clear()
    bus.flush()

    assert received == []


def test_post_queues_prebuilt_event():
    bus = EventBus()
    received = []
    bus.subscribe("evt", received.append)

    event = Event(name="evt", sender="lever", receivers=frozenset({"door"}))
    bus.post(event)
    bus.flush()

    assert received == [event]


# --- Receiver addressing ---


def test_addressed_event_reaches_only_its_receivers():
    bus = EventBus()
    hud = []
    log = []

    bus.subscribe("display_update", hud.append, receiver="hud")
    bus.subscribe("display_update", log.append, receiver="log")
    bus.publish("display_update", receivers=["hud"], current=1.0)
    bus.flush()

    assert len(hud) == 1
    assert log == []


def test_broadcast_reaches_addressed_subscribers():
    bus = EventBus()
    hud = []
    bus.subscribe("display_update", hud.append, receiver="hud")
    bus.publish("display_update", current=1.0)
    bus.flush()
    assert len(hud) == 1


def test_unaddressed_subscriber_sees_everything():
    bus = EventBus()
    seen = []
    bus.subscribe("evt", seen.append)
    bus.publish("evt", receivers=["someone_else"])
    bus.flush()
    assert len(seen) == 1


def test_publish_normalizes_receivers():
    bus = EventBus()
    event = bus.publish("evt", receivers=("a", "b", "a"))
    assert event.receivers == frozenset({"a", "b"})


# --- EventFilter ---


def test_filter_matches_by_name():
    f = EventFilter(names={"door_opened", "lever_pulled"})
    assert f.matches(Event(name="door_opened"))
    assert f.matches(Event(name="lever_pulled"))
    assert not f.matches(Event(name="door_closed"))


def test_filter_accepts_single_string_name():
    f = EventFilter(names="door_opened")
    assert f.names == frozenset({"door_opened"})


def test_default_filter_matches_nothing():
    assert not EventFilter().matches(Event(name="anything"))


def test_filter_restricts_senders():
    f = EventFilter(names={"pressed"}, senders=["button_a"])
    assert f.matches(Event(name="pressed", sender="button_a"))
    assert not f.matches(Event(name="pressed", sender="button_b"))
    assert not f.matches(Event(name="pressed"))


def test_filter_respects_addressing():
    f = EventFilter(names={"pressed"})
    addressed = Event(name="pressed", receivers=frozenset({"door"}))
    assert f.matches(addressed, receiver="door")
    assert not f.matches(addressed, receiver="gate")
    assert not f.matches(addressed)
    assert f.matches(Event(name="pressed"), receiver="gate")
