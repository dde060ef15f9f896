"""Service catalogue models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.markup import ResolvedMarkup, resolve_markup
from apps.bookings.domain.pricing import PricingBreakdown, compute_pricing
from apps.services.domain.availability import WeeklySchedule, is_open


class Service(models.Model):
    """A provider's offering sold through one hotel."""

    class Category(models.TextChoices):
        LAUNDRY = "laundry", _("Laundry")
        TRANSPORTATION = "transportation", _("Transportation")
        TOURS = "tours", _("Tours")
        SPA = "spa", _("Spa")
        DINING = "dining", _("Dining")
        ENTERTAINMENT = "entertainment", _("Entertainment")
        SHOPPING = "shopping", _("Shopping")
        FITNESS = "fitness", _("Fitness")
        HOUSEKEEPING = "housekeeping", _("Housekeeping")

    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="services",
    )
    provider = models.ForeignKey(
        "providers.ServiceProvider",
        on_delete=models.CASCADE,
        related_name="services",
    )
    category = models.CharField(max_length=32, choices=Category.choices)
    name = models.CharField(_("Name"), max_length=255)
    description = models.TextField(blank=True)
    base_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    currency = models.CharField(max_length=3, default="USD")
    duration_minutes = models.PositiveIntegerField(default=60)
    express_surcharge = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Flat surcharge for express handling; empty when express is not offered."),
    )
    item_catalog = models.JSONField(
        default=dict,
        blank=True,
        help_text=_('Priced items for itemised services: {"shirt": {"name": "Shirt", "price": "4.50"}}.'),
    )
    availability_schedule = models.JSONField(
        null=True,
        blank=True,
        help_text=_('Weekly hours: {"monday": {"enabled": true, "start": "08:00", "end": "18:00"}}. '
                    "Empty means always available."),
    )
    total_bookings = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Service")
        verbose_name_plural = _("Services")
        ordering = ["name"]
        indexes = [
            models.Index(fields=["hotel", "category", "is_active"], name="service_hotel_category_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.get_category_display()})"

    def clean(self) -> None:
        try:
            schedule = self.schedule()
        except ValueError as exc:
            raise ValidationError({"availability_schedule": str(exc)}) from exc
        if schedule is not None:
            self.availability_schedule = schedule.to_dict()
        for item_id, entry in (self.item_catalog or {}).items():
            if not isinstance(entry, dict) or "price" not in entry:
                raise ValidationError({"item_catalog": f"Item {item_id!r} has no price."})

    def schedule(self) -> WeeklySchedule | None:
        return WeeklySchedule.from_dict(self.availability_schedule)

    def is_open_at(self, now: datetime) -> bool:
        """``now`` must already be in the hotel's local time."""
        return is_open(self.schedule(), now)

    def resolve_markup(self) -> ResolvedMarkup:
        policy = getattr(self.hotel, "markup_policy", None)
        return resolve_markup(
            policy.to_domain() if policy is not None else None,
            self.category,
            self.provider.markup_override_value(),
        )

    def quote(self, quantity: int = 1) -> PricingBreakdown:
        """Guest-facing price of ``quantity`` units without extras."""
        markup = self.resolve_markup()
        return compute_pricing(
            self.base_price,
            quantity,
            Decimal("0"),
            markup.percentage,
            self.currency,
            markup_source=markup.source,
        )
