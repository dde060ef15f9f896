"""Hotel and markup policy models."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.exceptions import ValidationError  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.bookings.domain.markup import PLATFORM_DEFAULT_MARKUP, MarkupPolicy as MarkupPolicyValue


class Hotel(models.Model):
    """Hotel tenant selling provider services to its guests."""

    name = models.CharField(_("Name"), max_length=255)
    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="administered_hotels",
    )
    email = models.EmailField(_("Email"), blank=True)
    phone = models.CharField(_("Phone"), max_length=20, blank=True)
    address = models.CharField(_("Address"), max_length=255, blank=True)
    currency = models.CharField(_("Currency"), max_length=3, default="USD")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Hotel")
        verbose_name_plural = _("Hotels")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class MarkupPolicy(models.Model):
    """Hotel markup: default percentage plus per-category overrides."""

    hotel = models.OneToOneField(
        Hotel,
        on_delete=models.CASCADE,
        related_name="markup_policy",
    )
    default_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=PLATFORM_DEFAULT_MARKUP,
        validators=[MinValueValidator(Decimal("0"))],
    )
    category_percentages = models.JSONField(
        default=dict,
        blank=True,
        help_text=_('Per-category overrides, e.g. {"laundry": "20", "spa": "10"}.'),
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Markup policy")
        verbose_name_plural = _("Markup policies")

    def __str__(self) -> str:
        return f"Markup {self.default_percentage}% for {self.hotel_id}"

    def clean(self) -> None:
        try:
            self.to_domain()
        except ValueError as exc:
            raise ValidationError({"category_percentages": str(exc)}) from exc

    def to_domain(self) -> MarkupPolicyValue:
        overrides = self.category_percentages or {}
        if not isinstance(overrides, dict):
            raise ValueError("Category percentages must map category to percentage")
        return MarkupPolicyValue(
            default_percentage=self.default_percentage,
            category_percentages=dict(overrides),
        )
