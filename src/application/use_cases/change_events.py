"""Explicit change notifications between writers and the coordinator."""

from datetime import datetime
import threading
from typing import Callable, NamedTuple

EXPENSES_CHANGED = "EXPENSES_CHANGED"
CATEGORIES_CHANGED = "CATEGORIES_CHANGED"
MONTH_SELECTED = "MONTH_SELECTED"
AGGREGATES_PUBLISHED = "AGGREGATES_PUBLISHED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe channel keyed by event name.

    Handlers run on the publishing thread, in subscription order.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, name: str, handler: Handler) -> None:
        with self._lock:
            self._subscribers.setdefault(name, []).append(handler)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        with self._lock:
            handlers = self._subscribers.get(name, [])
            if handler in handlers:
                handlers.remove(handler)

    def publish(self, name: str, payload: dict) -> Event:
        """Deliver an event to every handler subscribed to ``name``.

        Returns:
            Event: The delivered event.
        """
        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        with self._lock:
            handlers = list(self._subscribers.get(name, []))
        for handler in handlers:
            handler(event)
        return event


__all__ = [
    "EXPENSES_CHANGED",
    "CATEGORIES_CHANGED",
    "MONTH_SELECTED",
    "AGGREGATES_PUBLISHED",
    "Event",
    "EventBus",
]
