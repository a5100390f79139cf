"""
Event system for translation observability.

Provides decoupled event publishing and subscription for monitoring
translate-all runs (progress bars, web push, debugging).
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List
import time


class EventType(Enum):
    """Translation run event types."""

    # Run-level events
    TRANSLATION_STARTED = "translation_started"
    TRANSLATION_COMPLETED = "translation_completed"
    TRANSLATION_INTERRUPTED = "translation_interrupted"
    TRANSLATION_FAILED = "translation_failed"

    # Language-level events
    LANGUAGE_STARTED = "language_started"

    # Block-level events
    BLOCK_TRANSLATED = "block_translated"
    BLOCK_REUSED = "block_reused"
    BLOCK_FAILED = "block_failed"

    # Page commits and progress
    PAGE_COMMITTED = "page_committed"
    PROGRESS_UPDATED = "progress_updated"


@dataclass
class Event:
    """Translation event.

    Attributes:
        type: Event type
        data: Event-specific data dictionary
        timestamp: Unix timestamp when event occurred
        source: Optional source identifier (e.g., "orchestrator")
    """
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    source: str = "unknown"


class EventBus:
    """Central event bus for translation runs."""

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}
        self._history: List[Event] = []
        self._record_history = False

    def subscribe(self, event_type: EventType, callback: Callable[[Event], None]) -> None:
        """Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            callback: Function to call when event occurs (receives Event object)
        """
        self._listeners.setdefault(event_type, []).append(callback)

    def subscribe_multiple(self, event_types: List[EventType],
                           callback: Callable[[Event], None]) -> None:
        for event_type in event_types:
            self.subscribe(event_type, callback)

    def unsubscribe(self, event_type: EventType, callback: Callable) -> None:
        if event_type in self._listeners and callback in self._listeners[event_type]:
            self._listeners[event_type].remove(callback)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        A failing listener is logged and skipped; it never stops the run.
        """
        if self._record_history:
            self._history.append(event)

        for listener in list(self._listeners.get(event.type, [])):
            try:
                listener(event)
            except Exception as e:
                from storyglot.utils.unified_logger import warning
                warning(f"Event listener failed on {event.type.value}: {e}")

    def enable_history(self) -> None:
        self._record_history = True

    def disable_history(self) -> None:
        self._record_history = False

    def get_history(self) -> List[Event]:
        return self._history.copy()

    def clear_history(self) -> None:
        self._history.clear()

    def get_events_by_type(self, event_type: EventType) -> List[Event]:
        """Get all recorded events of a specific type, oldest first."""
        return [e for e in self._history if e.type == event_type]
