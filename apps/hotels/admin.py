"""Admin registrations for hotels."""

from __future__ import annotations

from django.contrib import admin

from .models import Hotel, MarkupPolicy


class MarkupPolicyInline(admin.StackedInline):
    model = MarkupPolicy
    can_delete = False


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = ("name", "admin", "currency", "is_active", "created_at")
    list_filter = ("is_active", "currency")
    search_fields = ("name", "email", "phone")
    readonly_fields = ("created_at", "updated_at")
    inlines = [MarkupPolicyInline]
