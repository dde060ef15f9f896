"""Admin registrations for services."""

from __future__ import annotations

from django.contrib import admin

from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "category",
        "hotel",
        "provider",
        "base_price",
        "currency",
        "total_bookings",
        "is_active",
    )
    list_filter = ("category", "is_active", "hotel")
    search_fields = ("name", "provider__business_name")
    readonly_fields = ("total_bookings", "created_at", "updated_at")
