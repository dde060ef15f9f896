"""Notification delivery log.

One row per (audience, channel) attempt made by the dispatcher, so support
staff can see which guest or provider was told what, and which channel
failed.
"""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class NotificationDelivery(models.Model):
    """Outcome of a single notification attempt."""

    class Event(models.TextChoices):
        CREATED = "created", _("Booking created")
        CANCELLED = "cancelled", _("Booking cancelled")
        COMPLETED = "completed", _("Booking completed")

    class Audience(models.TextChoices):
        GUEST = "guest", _("Guest")
        PROVIDER = "provider", _("Provider")

    class Outcome(models.TextChoices):
        SENT = "sent", _("Sent")
        FAILED = "failed", _("Failed")
        SKIPPED = "skipped", _("Skipped")

    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.CASCADE,
        related_name="notification_deliveries",
    )
    event = models.CharField(max_length=20, choices=Event.choices)
    audience = models.CharField(max_length=20, choices=Audience.choices)
    channel = models.CharField(max_length=20)
    recipient = models.CharField(max_length=255, blank=True)
    outcome = models.CharField(max_length=20, choices=Outcome.choices)
    error = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Notification delivery")
        verbose_name_plural = _("Notification deliveries")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["booking", "event"], name="delivery_booking_event_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event} {self.channel} -> {self.audience}: {self.outcome}"
