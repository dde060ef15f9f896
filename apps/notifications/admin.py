"""Admin registrations for notification deliveries."""

from __future__ import annotations

from django.contrib import admin

from .models import NotificationDelivery


@admin.register(NotificationDelivery)
class NotificationDeliveryAdmin(admin.ModelAdmin):
    list_display = ("booking", "event", "audience", "channel", "recipient", "outcome", "created_at")
    list_filter = ("event", "audience", "channel", "outcome")
    search_fields = ("booking__booking_number", "recipient")
    readonly_fields = [field.name for field in NotificationDelivery._meta.fields]
