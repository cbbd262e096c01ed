"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            _("Personal info"),
            {"fields": ("full_name", "username", "phone", "avatar_url", "is_verified")},
        ),
        (
            _("Employment"),
            {"fields": ("role", "employee_id", "hired_date", "performance_rating")},
        ),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "full_name",
                    "password1",
                    "password2",
                    "phone",
                    "role",
                    "is_staff",
                    "is_superuser",
                ),
            },
        ),
    )
    list_display = (
        "email",
        "full_name",
        "role",
        "employee_id",
        "is_active",
        "is_verified",
    )
    list_filter = ("role", "is_active", "is_verified", "is_staff")
    search_fields = ("email", "full_name", "phone", "employee_id")
    ordering = ("email",)
    readonly_fields = ("created_at", "updated_at", "date_joined")
