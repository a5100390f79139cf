"""Unit tests for the event system."""

from storyglot.core.events import Event, EventBus, EventType


class TestEventBus:
    """Test EventBus functionality."""

    def test_subscribe_and_publish(self):
        """Subscribe to event and receive it when published."""
        bus = EventBus()
        received = []

        bus.subscribe(EventType.PAGE_COMMITTED, received.append)
        bus.publish(Event(type=EventType.PAGE_COMMITTED, data={"page_index": 0}))

        assert len(received) == 1
        assert received[0].data["page_index"] == 0

    def test_subscribe_multiple(self):
        """One handler can listen to several event types."""
        bus = EventBus()
        received = []

        bus.subscribe_multiple([EventType.BLOCK_TRANSLATED, EventType.BLOCK_REUSED], received.append)
        bus.publish(Event(type=EventType.BLOCK_TRANSLATED))
        bus.publish(Event(type=EventType.BLOCK_REUSED))
        bus.publish(Event(type=EventType.BLOCK_FAILED))  # Not subscribed

        assert len(received) == 2

    def test_unsubscribe(self):
        bus = EventBus()
        received = []

        bus.subscribe(EventType.PROGRESS_UPDATED, received.append)
        bus.unsubscribe(EventType.PROGRESS_UPDATED, received.append)
        bus.publish(Event(type=EventType.PROGRESS_UPDATED))

        assert received == []

    def test_failing_listener_does_not_stop_others(self):
        """A listener that raises is skipped, later listeners still run."""
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(EventType.TRANSLATION_STARTED, broken)
        bus.subscribe(EventType.TRANSLATION_STARTED, received.append)
        bus.publish(Event(type=EventType.TRANSLATION_STARTED))

        assert len(received) == 1

    def test_history(self):
        """History is only recorded while enabled."""
        bus = EventBus()
        bus.publish(Event(type=EventType.PAGE_COMMITTED))

        bus.enable_history()
        bus.publish(Event(type=EventType.PAGE_COMMITTED))
        bus.publish(Event(type=EventType.PROGRESS_UPDATED))

        assert len(bus.get_history()) == 2
        assert len(bus.get_events_by_type(EventType.PAGE_COMMITTED)) == 1

        bus.clear_history()
        assert bus.get_history() == []
