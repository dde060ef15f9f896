"""Message bus subscribers that queue booking notifications."""

from __future__ import annotations

import logging

from apps.bookings.domain.events import BookingCancelled, BookingCompleted, BookingCreated
from shared.application.message_bus import MessageBus
from shared.domain.base import DomainEvent

from .templates import NotificationEvent

logger = logging.getLogger(__name__)

NOTIFIED_EVENTS = {
    BookingCreated: NotificationEvent.CREATED,
    BookingCancelled: NotificationEvent.CANCELLED,
    BookingCompleted: NotificationEvent.COMPLETED,
}


def enqueue_booking_notifications(event: DomainEvent) -> None:
    """Queue the dispatch task; a broker outage must not reach the caller."""
    from .tasks import dispatch_booking_notifications

    notification_event = NOTIFIED_EVENTS[type(event)]
    try:
        dispatch_booking_notifications.delay(str(event.booking_id), notification_event.value)
    except Exception as e:
        logger.error(
            f"Could not queue {notification_event.value} notifications for booking {event.booking_id}: {e}",
            exc_info=True,
        )


def register(bus: MessageBus) -> None:
    for event_type in NOTIFIED_EVENTS:
        bus.subscribe(event_type, enqueue_booking_notifications)
