"""Admin registrations for platform accounts."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password", "role")}),
        (_("Guest profile"), {"fields": ("first_name", "last_name", "username", "phone", "room_number")}),
        (_("Access"), {"fields": ("is_active", "is_staff", "is_superuser", "groups")}),
        (_("Timestamps"), {"fields": ("last_login", "date_joined", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "role", "password1", "password2", "phone", "room_number"),
            },
        ),
    )
    list_display = ("email", "role", "room_number", "administered", "is_active")
    list_filter = ("role", "is_active")
    search_fields = ("email", "phone", "last_name", "room_number")
    ordering = ("email",)
    readonly_fields = ("created_at", "updated_at", "date_joined", "last_login")

    @admin.display(description=_("Hotels"))
    def administered(self, obj: CustomUser) -> str:
        return ", ".join(hotel.name for hotel in obj.administered_hotels.all()) or "-"

    def get_queryset(self, request):  # type: ignore
        return super().get_queryset(request).prefetch_related("administered_hotels")
