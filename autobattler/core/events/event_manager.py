"""
Event bus connecting the combat manager to its listeners.

The combat manager publishes what happened during a turn; the log manager
(and any presentation layer) subscribes by event type. Events are queued and
delivered in publication order when the publisher calls process_events(),
so listeners always observe a fully applied turn.
"""

from collections import defaultdict, deque
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import GameEvent, EventType


EventSubscriber = Callable[["GameEvent"], None]


class EventManager:
    """Single-threaded publish/subscribe bus with a FIFO delivery queue."""

    def __init__(self, enable_debug_logging: bool = False):
        """
        Args:
            enable_debug_logging: Report bus activity through the debug callback
        """
        self.enable_debug_logging = enable_debug_logging

        self._subscribers: dict["EventType", list[EventSubscriber]] = defaultdict(list)
        self._pending: deque[tuple["GameEvent", str]] = deque()

        self._events_published = 0
        self._events_processed = 0
        self._subscriber_errors = 0

        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Call ``subscriber`` for every delivered event of ``event_type``."""
        self._subscribers[event_type].append(subscriber)
        name = subscriber_name or getattr(subscriber, "__name__", "anonymous")
        self._debug_log(f"{name} listens to {event_type.name}")

    def publish(self, event: "GameEvent", source: str = "unknown") -> None:
        """Queue an event; subscribers see it on the next process_events()."""
        self._events_published += 1
        self._pending.append((event, source))

    def process_events(self) -> int:
        """Deliver every queued event in publication order.

        Events published by subscribers while delivering are delivered in the
        same call.

        Returns:
            Number of events delivered
        """
        delivered = 0
        while self._pending:
            event, source = self._pending.popleft()
            self._deliver(event, source)
            delivered += 1
        return delivered

    def _deliver(self, event: "GameEvent", source: str) -> None:
        self._events_processed += 1
        self._debug_log(f"{event.__class__.__name__} from {source} at t={event.timeline_time}")

        # A failing subscriber is counted and skipped; the rest still receive the event
        for subscriber in list(self._subscribers.get(event.event_type, [])):
            try:
                subscriber(event)
            except Exception as e:
                self._subscriber_errors += 1
                self._debug_log(
                    f"Error in subscriber {getattr(subscriber, '__name__', 'anonymous')}: {e}"
                )

    def get_statistics(self) -> dict[str, Any]:
        return {
            "events_published": self._events_published,
            "events_processed": self._events_processed,
            "events_queued": len(self._pending),
            "subscriber_errors": self._subscriber_errors,
            "subscribers_count": sum(len(subs) for subs in self._subscribers.values()),
        }
