"""Celery tasks for booking notifications."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.utils import timezone  # type: ignore

from .dispatcher import BookingNotice, NotificationDispatcher
from .templates import NotificationEvent

logger = logging.getLogger(__name__)


def build_notice(booking, event: NotificationEvent) -> BookingNotice:
    scheduled = timezone.localtime(booking.scheduled_at)
    return BookingNotice(
        event=event,
        booking_number=booking.booking_number,
        category=booking.category,
        service_name=booking.service.name,
        scheduled_for=scheduled.strftime("%d.%m.%Y %H:%M"),
        total_amount=str(booking.total_amount),
        currency=booking.currency,
        guest_name=booking.guest_full_name,
        guest_email=booking.guest_email,
        guest_phone=booking.guest_phone,
        room_number=booking.room_number,
        provider_name=booking.provider.business_name,
        provider_email=booking.provider.email,
        provider_phone=booking.provider.phone,
        reason=booking.cancellation_reason if event is NotificationEvent.CANCELLED else "",
    )


@shared_task(name="notifications.dispatch_booking", max_retries=0, ignore_result=True)
def dispatch_booking_notifications(booking_id: str, event: str) -> int:
    """Send the notifications for one booking event; returns deliveries made."""
    from apps.bookings.models import Booking

    from .models import NotificationDelivery

    booking = Booking.objects.select_related("service", "provider").filter(pk=booking_id).first()
    if booking is None:
        logger.warning(f"Booking {booking_id} vanished before its {event} notification")
        return 0

    notice = build_notice(booking, NotificationEvent(event))
    results = NotificationDispatcher().dispatch(notice)

    NotificationDelivery.objects.bulk_create(
        [
            NotificationDelivery(
                booking=booking,
                event=event,
                audience=result.audience.value,
                channel=result.channel,
                recipient=result.recipient,
                outcome=(
                    NotificationDelivery.Outcome.SENT if result.success
                    else NotificationDelivery.Outcome.SKIPPED if result.skipped
                    else NotificationDelivery.Outcome.FAILED
                ),
                error=result.error,
            )
            for result in results
        ]
    )
    return sum(1 for result in results if result.success)
