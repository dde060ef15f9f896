"""Booking persistence model.

One row per booking. The pricing breakdown is denormalised into columns
because it is frozen at creation; the category-specific payload lives in
``details`` and is interpreted through ``kind``.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Booking(models.Model):
    """Service booking made by a hotel guest."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Awaiting payment")
        PAID = "paid", _("Paid")
        COMPLETED = "completed", _("Settled")
        FAILED = "failed", _("Payment failed")

    class PaymentMethod(models.TextChoices):
        ONLINE = "online", _("Online")
        CASH = "cash", _("Cash")

    class Kind(models.TextChoices):
        GENERIC = "generic", _("Generic")
        LAUNDRY = "laundry", _("Laundry")
        TRANSPORTATION = "transportation", _("Transportation")
        DINING = "dining", _("Dining")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    booking_number = models.CharField(max_length=32, unique=True, editable=False)
    kind = models.CharField(max_length=20, choices=Kind.choices, default=Kind.GENERIC)
    category = models.CharField(max_length=32)

    service = models.ForeignKey(
        "services.Service",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    provider = models.ForeignKey(
        "providers.ServiceProvider",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    guest = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="service_bookings",
    )

    guest_first_name = models.CharField(max_length=150)
    guest_last_name = models.CharField(max_length=150, blank=True)
    guest_email = models.EmailField(blank=True)
    guest_phone = models.CharField(max_length=20, blank=True)
    room_number = models.CharField(max_length=20, blank=True)

    preferred_date = models.DateField()
    preferred_time = models.CharField(max_length=5, help_text=_("Normalised HH:MM."))
    scheduled_at = models.DateTimeField(help_text=_("Start of service; the cancellation window is measured from it."))
    duration_minutes = models.PositiveIntegerField(default=60)

    pickup_location = models.CharField(max_length=255, blank=True)
    delivery_location = models.CharField(max_length=255, blank=True)
    instructions = models.TextField(blank=True)
    details = models.JSONField(default=dict, blank=True)

    base_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)
    express_surcharge = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    markup_percentage = models.DecimalField(max_digits=5, decimal_places=2)
    markup_amount = models.DecimalField(max_digits=12, decimal_places=2)
    markup_source = models.CharField(max_length=32, blank=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    provider_earnings = models.DecimalField(max_digits=12, decimal_places=2)
    hotel_earnings = models.DecimalField(max_digits=12, decimal_places=2)
    platform_fee = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="USD")

    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_reference = models.CharField(max_length=128, blank=True)
    payment_failure_reason = models.CharField(max_length=255, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    confirmed_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)

    review_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    review_comment = models.TextField(blank=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(review_rating__isnull=True)
                | models.Q(review_rating__gte=1, review_rating__lte=5),
                name="booking_review_rating_range",
            ),
        ]
        indexes = [
            models.Index(fields=["provider", "status"], name="booking_provider_status_idx"),
            models.Index(fields=["hotel", "created_at"], name="booking_hotel_created_idx"),
            models.Index(fields=["guest", "created_at"], name="booking_guest_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.booking_number} ({self.status})"

    @property
    def guest_full_name(self) -> str:
        return f"{self.guest_first_name} {self.guest_last_name}".strip()
