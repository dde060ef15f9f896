"""
Message Bus

Routes committed domain events to their subscribers. Subscribers are
side effects (notification fan-out, audit) that must never undo or fail
the operation that produced the event.
"""

from typing import Callable, Dict, Iterable, List, Type
import logging

from shared.domain.base import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class MessageBus:
    """
    Event bus (1:N)

    Every handler registered for an event type is called in registration
    order. A failing handler is logged and skipped; the rest still run.
    """

    def __init__(self):
        self._event_handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler):
        handlers = self._event_handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug(f"Subscribed {handler.__name__} to {event_type.__name__}")

    def publish(self, events: Iterable[DomainEvent]) -> int:
        """
        Publish events, returning how many handler calls failed.
        """
        failures = 0
        for event in events:
            handlers = self._event_handlers.get(type(event), [])

            if not handlers:
                logger.debug(f"No handlers registered for event {event.name}")
                continue

            logger.info(f"Publishing event: {event.name} (ID: {event.event_id})")

            for handler in handlers:
                try:
                    handler(event)
                except Exception as e:
                    failures += 1
                    logger.error(
                        f"Error in event handler {handler.__name__} "
                        f"for event {event.name}: {e}",
                        exc_info=True
                    )
        return failures


# Global message bus instance, wired in AppConfig.ready()
message_bus = MessageBus()
