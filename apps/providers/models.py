"""Service provider model."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.markup import ProviderMarkupOverride


class ServiceProvider(models.Model):
    """Business fulfilling services booked through a hotel."""

    class ProviderType(models.TextChoices):
        INTERNAL = "internal", _("Hotel-operated")
        EXTERNAL = "external", _("External business")

    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="providers",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="providers",
    )
    business_name = models.CharField(_("Business name"), max_length=255)
    email = models.EmailField(_("Email"), blank=True)
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        blank=True,
        help_text=_("WhatsApp-capable number in international format."),
    )
    provider_type = models.CharField(
        max_length=20,
        choices=ProviderType.choices,
        default=ProviderType.EXTERNAL,
    )
    markup_override = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Replaces the hotel markup for this provider's services when set."),
    )
    markup_override_reason = models.CharField(max_length=255, blank=True)
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        null=True,
        blank=True,
        help_text=_("Average of all reviews on completed bookings."),
    )
    total_bookings = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Service provider")
        verbose_name_plural = _("Service providers")
        ordering = ["business_name"]
        indexes = [
            models.Index(fields=["hotel", "is_active"], name="provider_hotel_active_idx"),
        ]

    def __str__(self) -> str:
        return self.business_name

    @property
    def is_internal(self) -> bool:
        return self.provider_type == self.ProviderType.INTERNAL

    def save(self, *args, **kwargs):  # type: ignore
        if self.is_internal:
            self.markup_override = Decimal("0")
            self.markup_override_reason = "Internal provider"
        super().save(*args, **kwargs)

    def markup_override_value(self) -> ProviderMarkupOverride | None:
        if self.is_internal:
            return ProviderMarkupOverride(Decimal("0"))
        if self.markup_override is None:
            return None
        return ProviderMarkupOverride(self.markup_override)
