"""
Typed event bus for engine lifecycle notifications.

The loop, the resource provider and the mode gate publish LoopEvent
members here so game content (and tests) can observe what the engine
is doing without the engine knowing who listens.

Usage:
    bus = EventBus()
    bus.subscribe(LoopEvent.STARTED, lambda event: print("go"))
    bus.publish(LoopEvent.STARTED, frame=0)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class LoopEvent(Enum):
    """Events published by the engine."""
    # Assets
    ASSETS_REQUESTED = auto()
    ASSETS_READY = auto()
    ASSETS_FAILED = auto()

    # Loop lifecycle
    STARTED = auto()
    STOPPED = auto()

    # Per-frame
    ENTITY_FAILED = auto()
    MODE_CHANGED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether a handler stopped propagation
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop delivery to lower priority handlers."""
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
    one_shot: bool


class EventBus:
    """
    Publish/subscribe hub.

    Handlers run synchronously in priority order (highest first, ties in
    subscription order). Events published from inside a handler are
    queued and delivered after the current dispatch finishes, so a
    handler never re-enters the bus.
    """

    def __init__(self):
        self._handlers: dict[Enum, list[_Subscription]] = {}
        self._queue: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first
            one_shot: If True, handler is removed after its first call
        """
        subs = self._handlers.setdefault(event_type, [])
        index = len(subs)
        for i, sub in enumerate(subs):
            if priority > sub.priority:
                index = i
                break
        subs.insert(index, _Subscription(priority, handler, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subs = self._handlers.get(event_type)
        if subs is None:
            return
        self._handlers[event_type] = [s for s in subs if s.handler != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        if self._dispatching:
            self._queue.append(event)
        else:
            self._dispatch(event)
        return event

    def clear(self, event_type: Enum | None = None) -> None:
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)

    def _dispatch(self, event: Event) -> None:
        self._dispatching = True
        try:
            self._deliver(event)
            while self._queue:
                self._deliver(self._queue.pop(0))
        finally:
            self._dispatching = False

    def _deliver(self, event: Event) -> None:
        subs = self._handlers.get(event.type)
        if not subs:
            return

        spent = []
        for sub in list(subs):
            try:
                sub.handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event.type}")

            if sub.one_shot:
                spent.append(sub)
            if event.consumed:
                break

        for sub in spent:
            if sub in subs:
                subs.remove(sub)
