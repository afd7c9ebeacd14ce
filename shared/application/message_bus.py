"""
Message Bus

Routes domain events to the handlers subscribed to them.
Events are delivered after the unit of work that raised them commits.
"""

from typing import Callable, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    Event bus (one event type, many handlers)

    Handler failures are logged and never stop delivery to the remaining
    handlers: by the time events are published the data is committed.
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler):
        """Subscribe ``handler`` to ``event_type``; subscribing twice is a no-op"""
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            logger.debug("Subscribed %s to %s", getattr(handler, '__name__', handler), event_type.__name__)

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        return list(self._event_handlers.get(event_type, []))

    def clear(self):
        self._event_handlers.clear()

    def publish_events(self, events: Iterable[DomainEvent]):
        """Deliver each event to every handler subscribed to its type"""
        for event in events:
            event_type = type(event)
            handlers = self._event_handlers.get(event_type, [])

            if not handlers:
                logger.debug("No handlers subscribed to %s", event_type.__name__)
                continue

            logger.info("Publishing event %s (ID: %s)", event_type.__name__, event.event_id)

            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        "Event handler %s failed for %s",
                        getattr(handler, '__name__', handler), event_type.__name__,
                    )


# Global message bus instance
message_bus = MessageBus()
