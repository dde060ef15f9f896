"""Role-based permission helpers shared by the API apps."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


def is_platform_staff(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
        return True
    return hasattr(user, "is_platform_superuser") and user.is_platform_superuser()


class IsPlatformStaff(permissions.BasePermission):
    """Staff-only endpoints, e.g. payment gateway callbacks relayed by the platform."""

    def has_permission(self, request, view) -> bool:  # type: ignore
        return is_platform_staff(request.user)
