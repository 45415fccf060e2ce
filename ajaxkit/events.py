"""
Event Dispatcher

Dispatches library events to the plugins that subscribed to them.

Events are fire-and-forget: each listener's handle_event() is called in
sequence; exceptions are caught, logged, and execution continues.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ajaxkit.plugins.base import EventListener

logger = logging.getLogger(__name__)

# ── Event names ───────────────────────────────────────────────────────────────
EVENT_PRE_SETUP = "pre.setup"
EVENT_POST_SETUP = "post.setup"
EVENT_PRE_REQUEST = "pre.request"
EVENT_POST_REQUEST = "post.request"

ALL_EVENTS: list[str] = [
    EVENT_PRE_SETUP,
    EVENT_POST_SETUP,
    EVENT_PRE_REQUEST,
    EVENT_POST_REQUEST,
]


class EventDispatcher:
    def __init__(self) -> None:
        self._listeners: dict[str, list[EventListener]] = defaultdict(list)

    def add_listener(self, listener: EventListener) -> None:
        """Subscribe a listener to every event it declares."""
        for event_name in listener.get_events():
            if event_name not in ALL_EVENTS:
                logger.warning("Listener %s subscribes to unknown event %s", listener.name, event_name)
            self._listeners[event_name].append(listener)

    def listeners(self, event_name: str) -> list[EventListener]:
        return list(self._listeners.get(event_name, []))

    def fire(self, event_name: str, payload: dict[str, Any] | None = None) -> list[Any]:
        """
        Fire an event to all subscribed listeners.

        Args:
            event_name: One of the event name constants.
            payload:    Arbitrary data passed to each listener.

        Returns:
            List of return values from each listener.
        """
        payload = payload or {}
        results: list[Any] = []
        for listener in self._listeners.get(event_name, []):
            try:
                results.append(listener.handle_event(event_name, payload))
            except Exception as exc:
                logger.warning("Listener %s event %s raised: %s", listener.name, event_name, exc)
        return results
