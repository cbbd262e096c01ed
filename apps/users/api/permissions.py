"""Permission classes shared by the role-scoped APIs."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsSuperAdmin(permissions.BasePermission):
    """
    Permission class that only allows Super Admins to access.

    Super Admin is a user with role='super_admin' who hires property
    admins, assigns properties and reads platform analytics.
    """

    message = "Unauthorized."

    def has_permission(self, request, view) -> bool:  # type: ignore
        """Check if user is authenticated and is a super_admin."""
        user = request.user
        if not user.is_authenticated:
            return False
        return hasattr(user, "is_super_admin") and user.is_super_admin()


class IsPlatformAdmin(permissions.BasePermission):
    """Allows super admins and property admins."""

    message = "Unauthorized."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if hasattr(user, "is_super_admin") and user.is_super_admin():
            return True
        return hasattr(user, "is_property_admin") and user.is_property_admin()


class IsSelfOrSuperAdmin(permissions.BasePermission):
    """
    Object-level permission: a user may read or edit their own profile,
    super admins may read or edit anyone's.
    """

    message = "Unauthorized."

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if hasattr(user, "is_super_admin") and user.is_super_admin():
            return True
        return obj.pk == user.pk
