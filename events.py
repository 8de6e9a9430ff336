# events.py
"""
Routes pygame events to listeners registered once at startup.
"""
import logging
import pygame
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional

Handler = Callable[[pygame.event.Event], None]


class EventRouter:
    """
    Maps event types to handler lists.

    Handlers read the state they act on by reference, so registering them
    once is enough for the lifetime of the window.
    """
    def __init__(self):
        self._listeners: Dict[int, List[Handler]] = defaultdict(list)

    def add_listener(self, event_type: int, handler: Handler) -> None:
        if handler not in self._listeners[event_type]:
            self._listeners[event_type].append(handler)

    def remove_listener(self, event_type: int, handler: Handler) -> None:
        handlers = self._listeners.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event_type: Optional[int] = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(handlers) for handlers in self._listeners.values())

    def dispatch(self, event: pygame.event.Event) -> int:
        """
        Calls every handler registered for the event's type, in order.

        Returns:
            int: The number of handlers called.
        """
        # Copy so a handler may unregister itself while being dispatched
        handlers = list(self._listeners.get(event.type, []))
        for handler in handlers:
            handler(event)
        return len(handlers)

    def pump(self, events: Iterable[pygame.event.Event]) -> None:
        for event in events:
            self.dispatch(event)

    def clear(self) -> None:
        count = self.listener_count()
        self._listeners.clear()
        logging.debug(f"Removed {count} event listeners.")
