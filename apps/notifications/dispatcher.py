"""
Notification Dispatcher

Sends one booking notice to every audience the event concerns over every
channel. Each (audience, channel) attempt is isolated: an exception or a
failed result is logged and reported, the remaining attempts still run,
and nothing propagates to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from .channels import BaseChannel, ChannelResult, OutgoingMessage, default_channels
from .templates import EVENT_AUDIENCES, Audience, NotificationEvent, select_templates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingNotice:
    """Snapshot of the booking fields a notification needs."""

    event: NotificationEvent
    booking_number: str
    category: str
    service_name: str
    scheduled_for: str
    total_amount: str
    currency: str
    guest_name: str
    guest_email: str = ""
    guest_phone: str = ""
    room_number: str = ""
    provider_name: str = ""
    provider_email: str = ""
    provider_phone: str = ""
    reason: str = ""


def build_message(notice: BookingNotice, audience: Audience) -> OutgoingMessage:
    templates = select_templates(notice.category)
    if audience is Audience.GUEST:
        name, email, phone = notice.guest_name, notice.guest_email, notice.guest_phone
    else:
        name, email, phone = notice.provider_name, notice.provider_email, notice.provider_phone

    lines = [
        f"Booking: {notice.booking_number}",
        f"Service: {notice.service_name}",
        f"Scheduled for: {notice.scheduled_for}",
        f"Total: {notice.total_amount} {notice.currency}",
    ]
    if audience is Audience.PROVIDER:
        lines.append(f"Guest: {notice.guest_name}, room {notice.room_number or '-'}")
    if notice.reason:
        lines.append(f"Reason: {notice.reason}")

    return OutgoingMessage(
        audience=audience,
        recipient_name=name,
        email=email,
        phone=phone,
        subject=templates.subject(notice.event, audience, notice.booking_number),
        body="\n".join(lines),
        template=templates.template_name(notice.event, audience),
        parameters=(name, notice.booking_number, notice.service_name, notice.scheduled_for),
    )


class NotificationDispatcher:
    def __init__(self, channels: Sequence[BaseChannel] | None = None):
        self.channels = list(channels) if channels is not None else default_channels()

    def dispatch(
        self,
        notice: BookingNotice,
        channels: Iterable[BaseChannel] | None = None,
    ) -> list[ChannelResult]:
        channels = list(channels) if channels is not None else self.channels
        results: list[ChannelResult] = []

        for audience in EVENT_AUDIENCES[notice.event]:
            message = build_message(notice, audience)
            for channel in channels:
                results.append(self._attempt(channel, message, notice))

        sent = sum(1 for result in results if result.success)
        logger.info(
            f"Dispatched {notice.event.value} notifications for {notice.booking_number}: "
            f"{sent}/{len(results)} delivered"
        )
        return results

    @staticmethod
    def _attempt(channel: BaseChannel, message: OutgoingMessage, notice: BookingNotice) -> ChannelResult:
        try:
            result = channel.send(message)
        except Exception as e:
            logger.error(
                f"{channel.name} channel raised for {message.audience.value} of "
                f"{notice.booking_number}: {e}",
                exc_info=True,
            )
            return ChannelResult(
                channel=channel.name,
                audience=message.audience,
                recipient="",
                success=False,
                error=str(e),
            )

        if result.skipped:
            logger.info(
                f"Skipped {channel.name} to {message.audience.value} for {notice.booking_number}: {result.error}"
            )
        elif not result.success:
            logger.warning(
                f"{channel.name} to {message.audience.value} failed for {notice.booking_number}: {result.error}"
            )
        return result
