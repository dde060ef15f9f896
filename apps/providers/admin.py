"""Admin registrations for service providers."""

from __future__ import annotations

from django.contrib import admin

from .models import ServiceProvider


@admin.register(ServiceProvider)
class ServiceProviderAdmin(admin.ModelAdmin):
    list_display = (
        "business_name",
        "hotel",
        "provider_type",
        "markup_override",
        "rating",
        "total_bookings",
        "is_active",
    )
    list_filter = ("provider_type", "is_active", "hotel")
    search_fields = ("business_name", "email", "phone")
    readonly_fields = ("rating", "total_bookings", "created_at", "updated_at")
