"""Tests for hearken.events.event_bus — fan-out event bus."""

import asyncio
import logging

from hearken.events.event_bus import EventBus
from hearken.events.types import SessionEvent, SessionEventType


def _make_event(event_type: SessionEventType = SessionEventType.LISTENING_CHANGED) -> SessionEvent:
    """Helper to create a minimal event for testing."""
    return SessionEvent(type=event_type, listening=True)


class TestSubscribe:
    """Tests for EventBus.subscribe()."""

    async def test_subscribe_creates_a_new_queue(self, event_bus: EventBus):
        queue = event_bus.subscribe()
        assert isinstance(queue, asyncio.Queue)

    async def test_subscribe_increments_subscriber_count(self, event_bus: EventBus):
        assert event_bus.subscriber_count == 0
        event_bus.subscribe()
        event_bus.subscribe()
        assert event_bus.subscriber_count == 2

    async def test_unsubscribe(self, event_bus: EventBus):
        queue = event_bus.subscribe()
        event_bus.unsubscribe(queue)
        assert event_bus.subscriber_count == 0

    async def test_unsubscribe_unknown_queue_is_noop(self, event_bus: EventBus):
        event_bus.unsubscribe(asyncio.Queue())
        assert event_bus.subscriber_count == 0


class TestEmit:
    """Tests for EventBus.emit_nowait()."""

    async def test_emit_fanout_to_multiple_subscribers(self, event_bus: EventBus):
        q1 = event_bus.subscribe()
        q2 = event_bus.subscribe()
        event = _make_event()
        event_bus.emit_nowait(event)
        assert q1.get_nowait() is event
        assert q2.get_nowait() is event

    def test_emit_nowait_from_sync_code(self, event_bus: EventBus):
        queue = event_bus.subscribe()
        event = _make_event(SessionEventType.TRANSCRIPT_CLEARED)
        event_bus.emit_nowait(event)
        assert queue.get_nowait() is event

    async def test_emit_without_subscribers(self, event_bus: EventBus):
        event_bus.emit_nowait(_make_event())

    async def test_unsubscribed_queue_receives_nothing(self, event_bus: EventBus):
        queue = event_bus.subscribe()
        event_bus.unsubscribe(queue)
        event_bus.emit_nowait(_make_event())
        assert queue.empty()

    async def test_full_queue_drops_event(self, caplog):
        bus = EventBus(maxsize=1)
        slow = bus.subscribe()
        fast = bus.subscribe()
        first, second = _make_event(), _make_event()

        bus.emit_nowait(first)
        fast.get_nowait()
        with caplog.at_level(logging.WARNING):
            bus.emit_nowait(second)

        assert slow.qsize() == 1
        assert slow.get_nowait() is first
        assert fast.get_nowait() is second
        assert "dropping event" in caplog.text

    async def test_order_preserved(self, event_bus: EventBus):
        queue = event_bus.subscribe()
        events = [_make_event(t) for t in SessionEventType]
        for event in events:
            event_bus.emit_nowait(event)
        assert [queue.get_nowait() for _ in events] == events
