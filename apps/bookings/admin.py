"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "booking_number",
        "category",
        "service",
        "provider",
        "guest",
        "status",
        "payment_method",
        "payment_status",
        "scheduled_at",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "payment_method", "category", "hotel")
    search_fields = ("booking_number", "guest__email", "guest_email", "provider__business_name")
    # State changes go through the booking handlers, never the admin form.
    readonly_fields = [field.name for field in Booking._meta.fields]

    def has_add_permission(self, request):  # type: ignore
        return False
