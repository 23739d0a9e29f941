"""
Asynchronous event bus for storefront notifications (e.g. cart badge refresh).
"""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from models.events import StorefrontEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[StorefrontEvent], Coroutine[Any, Any, None]]


class EventBus:
    """Publish/subscribe hub; handlers are async callables keyed by event type."""

    def __init__(self):
        self.subscribers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_type: str, callback: EventHandler) -> None:
        """Subscribe to an event type. Duplicate subscriptions are ignored."""
        if not callable(callback):
            raise TypeError("Callback must be a callable async function.")
        handlers = self.subscribers.setdefault(event_type, [])
        if callback in handlers:
            logger.warning(f"Callback {_name(callback)} already subscribed to {event_type}")
            return
        handlers.append(callback)
        logger.debug(f"Callback {_name(callback)} subscribed to {event_type}")

    def unsubscribe(self, event_type: str, callback: EventHandler) -> None:
        """Unsubscribe a specific callback from an event type."""
        handlers = self.subscribers.get(event_type)
        if handlers is None:
            return
        try:
            handlers.remove(callback)
        except ValueError:
            logger.warning(f"Callback {_name(callback)} not found for event type {event_type}")
            return
        logger.debug(f"Callback {_name(callback)} unsubscribed from {event_type}")
        if not handlers:
            del self.subscribers[event_type]

    async def publish(self, event: StorefrontEvent) -> int:
        """Deliver an event to its subscribers. Returns the number of handlers that succeeded."""
        if not isinstance(event, StorefrontEvent):
            logger.error(f"Attempted to publish invalid event type: {type(event)}")
            return 0

        logger.info(f"Event published: {event.event_type} from {event.source.value}")
        handlers = list(self.subscribers.get(event.event_type, []))
        if not handlers:
            return 0

        results = await asyncio.gather(*(handler(event) for handler in handlers), return_exceptions=True)
        delivered = 0
        for handler, result in zip(handlers, results):
            if isinstance(result, Exception):
                logger.error(
                    f"Error in subscriber callback '{_name(handler)}' for event {event.event_type}: {result}"
                )
            else:
                delivered += 1
        return delivered


def _name(callback: Any) -> str:
    return getattr(callback, "__name__", type(callback).__name__)
