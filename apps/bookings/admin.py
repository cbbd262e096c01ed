"""Admin registration for booking requests."""

from __future__ import annotations

from django.contrib import admin

from .models import BookingRequest


@admin.register(BookingRequest)
class BookingRequestAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "property",
        "tenant_name",
        "tenant_phone",
        "admin",
        "status",
        "preferred_viewing_date",
        "scheduled_date",
        "created_at",
    )
    list_filter = ("status", "preferred_viewing_date")
    search_fields = ("tenant_name", "tenant_email", "property__title", "property__area")
    readonly_fields = (
        "responded_at",
        "feedback_rating",
        "feedback_comment",
        "created_at",
        "updated_at",
    )

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
