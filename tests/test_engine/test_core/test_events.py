import pytest
from enum import Enum, auto
from gemrun.core.events import EventBus, Event, LoopEvent


class MockEvent(Enum):
    TEST_EVENT = auto()
    OTHER_EVENT = auto()


def test_event_bus_subscribe_publish(event_bus):
    received = []
    event_bus.subscribe(MockEvent.TEST_EVENT, received.append)
    event_bus.publish(MockEvent.TEST_EVENT, data="test")

    assert len(received) == 1
    assert received[0].type == MockEvent.TEST_EVENT
    assert received[0]["data"] == "test"


def test_event_bus_unsubscribe(event_bus):
    received = []
    event_bus.subscribe(MockEvent.TEST_EVENT, received.append)
    event_bus.unsubscribe(MockEvent.TEST_EVENT, received.append)
    event_bus.publish(MockEvent.TEST_EVENT)

    assert received == []


def test_event_priority(event_bus):
    order = []
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("low"), priority=1)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("high"), priority=10)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal"), priority=5)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: order.append("normal2"), priority=5)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["high", "normal", "normal2", "low"]


def test_event_consumption(event_bus):
    received = []

    def consumer(event):
        received.append("consumer")
        event.consume()

    event_bus.subscribe(MockEvent.TEST_EVENT, consumer, priority=10)
    event_bus.subscribe(MockEvent.TEST_EVENT, lambda e: received.append("later"), priority=5)

    event = event_bus.publish(MockEvent.TEST_EVENT)

    assert received == ["consumer"]
    assert event.consumed


def test_one_shot_handler(event_bus):
    received = []
    event_bus.subscribe(LoopEvent.STARTED, received.append, one_shot=True)

    event_bus.publish(LoopEvent.STARTED)
    event_bus.publish(LoopEvent.STARTED)

    assert len(received) == 1


def test_failing_handler_does_not_stop_others(event_bus, caplog):
    received = []

    def broken(event):
        raise RuntimeError("boom")

    event_bus.subscribe(MockEvent.TEST_EVENT, broken, priority=1)
    event_bus.subscribe(MockEvent.TEST_EVENT, received.append)

    event_bus.publish(MockEvent.TEST_EVENT)

    assert len(received) == 1
    assert f"Error in event handler for {MockEvent.TEST_EVENT}" in caplog.text
    assert "RuntimeError: boom" in caplog.text


def test_events_published_during_dispatch_are_queued(event_bus):
    order = []

    def first(event):
        order.append("first:start")
        event_bus.publish(MockEvent.OTHER_EVENT)
        order.append("first:end")

    event_bus.subscribe(MockEvent.TEST_EVENT, first)
    event_bus.subscribe(MockEvent.OTHER_EVENT, lambda e: order.append("other"))

    event_bus.publish(MockEvent.TEST_EVENT)

    assert order == ["first:start", "first:end", "other"]


def test_event_get_default():
    event = Event(type=MockEvent.TEST_EVENT, data={"a": 1})
    assert event.get("a") == 1
    assert event.get("b", 2) == 2
