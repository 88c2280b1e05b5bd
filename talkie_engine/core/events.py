"""
Typed event bus for decoupled observers.

Event types are Enum members, so subscribers and publishers share names
instead of magic strings. The playback machine publishes its transitions
here; hosts subscribe to drive sound cues, debug overlays and the like.

Usage:
    bus = EventBus()
    bus.subscribe(DialogueEvent.CHOICE_OPENED, on_choices)
    bus.publish(DialogueEvent.CHOICE_OPENED, labels=("Yes", "No"))
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Keyword payload given to publish()
        consumed: Set by a handler to stop lower-priority handlers
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop propagation to the remaining handlers."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass
class _Subscription:
    priority: int
    handler: EventHandler
    once: bool


class EventBus:
    """
    Publish/subscribe hub.

    Handlers run in descending priority; ties keep subscription order.
    Events published from inside a handler are queued and dispatched after
    the current event finishes, so handlers always see events in order.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._queue: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        once: bool = False,
    ) -> None:
        """
        Register a handler.

        Args:
            event_type: The event type to listen for
            handler: Callback receiving the Event
            priority: Higher runs first
            once: Drop the handler after its first call
        """
        subs = self._subscriptions.setdefault(event_type, [])
        index = len(subs)
        for i, sub in enumerate(subs):
            if priority > sub.priority:
                index = i
                break
        subs.insert(index, _Subscription(priority, handler, once))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subs = self._subscriptions.get(event_type)
        if subs:
            self._subscriptions[event_type] = [
                s for s in subs if s.handler != handler
            ]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event (check .consumed to see whether a handler claimed it)
        """
        event = Event(type=event_type, data=data)
        if self._dispatching:
            self._queue.append(event)
        else:
            self._dispatch(event)
            while self._queue:
                self._dispatch(self._queue.pop(0))
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop handlers for one event type, or all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        subs = self._subscriptions.get(event.type)
        if not subs:
            return

        self._dispatching = True
        try:
            for sub in list(subs):
                if sub.once:
                    subs.remove(sub)
                try:
                    sub.handler(event)
                except Exception:
                    # A faulty observer must not break playback
                    logger.exception("Error in event handler for %s", event.type)
                if event.consumed:
                    break
        finally:
            self._dispatching = False
