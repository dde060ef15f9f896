"""FilterSet definitions for the service listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Service


class ServiceFilterSet(django_filters.FilterSet):
    hotel = django_filters.NumberFilter(field_name="hotel_id", lookup_expr="exact")
    provider = django_filters.NumberFilter(field_name="provider_id", lookup_expr="exact")
    category = django_filters.ChoiceFilter(field_name="category", choices=Service.Category.choices)
    price_max = django_filters.NumberFilter(field_name="base_price", lookup_expr="lte")

    class Meta:
        model = Service
        fields = ["hotel", "provider", "category"]
