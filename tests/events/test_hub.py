"""Tests for the event hub."""

import asyncio

import pytest

from events.hub import EventHub, Subscription


@pytest.fixture
def hub() -> EventHub:
    return EventHub("TestEvents")


def test_emit_reaches_subscribers_in_order(hub: EventHub):
    received = []
    hub.subscribe("save", lambda payload: received.append(("first", payload)))
    hub.subscribe("save", lambda payload: received.append(("second", payload)))

    assert hub.emit("save", {"_id": "1"}) == 2
    assert received == [("first", {"_id": "1"}), ("second", {"_id": "1"})]


def test_emit_only_matching_event(hub: EventHub):
    received = []
    hub.subscribe("save:1", received.append)

    hub.emit("save:2", "other")
    hub.emit("save", "general")

    assert received == []


def test_no_subscriber_limit(hub: EventHub):
    received = []
    for _ in range(1000):
        hub.subscribe("save", received.append)

    assert hub.listener_count("save") == 1000
    assert hub.emit("save", "x") == 1000
    assert len(received) == 1000


def test_unsubscribe(hub: EventHub):
    received = []
    subscription = hub.subscribe("remove", received.append)

    assert isinstance(subscription, Subscription)
    assert hub.unsubscribe(subscription) is True
    assert hub.unsubscribe(subscription) is False

    hub.emit("remove", "gone")
    assert received == []
    assert hub.listener_count("remove") == 0


def test_same_handler_subscribed_twice_gets_separate_handles(hub: EventHub):
    received = []
    first = hub.subscribe("save", received.append)
    hub.subscribe("save", received.append)

    hub.unsubscribe(first)
    hub.emit("save", "x")

    assert received == ["x"]


def test_no_replay_for_late_subscribers(hub: EventHub):
    assert hub.emit("save", "early") == 0

    received = []
    hub.subscribe("save", received.append)

    assert received == []


def test_failing_handler_does_not_stop_delivery(hub: EventHub):
    received = []

    def broken(payload):
        raise RuntimeError("boom")

    hub.subscribe("save", broken)
    hub.subscribe("save", received.append)

    assert hub.emit("save", "x") == 2
    assert received == ["x"]


def test_handler_may_unsubscribe_during_emit(hub: EventHub):
    received = []

    def once(payload):
        received.append(payload)
        hub.unsubscribe(subscription)

    subscription = hub.subscribe("save", once)

    hub.emit("save", "a")
    hub.emit("save", "b")

    assert received == ["a"]


@pytest.mark.asyncio
async def test_coroutine_handler_is_scheduled(hub: EventHub):
    received = asyncio.Queue()

    async def handler(payload):
        await received.put(payload)

    hub.subscribe("save", handler)
    hub.emit("save", "x")

    assert await asyncio.wait_for(received.get(), timeout=1) == "x"
