"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Amenity, Property


@admin.register(Amenity)
class AmenityAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "icon")
    list_filter = ("category",)
    search_fields = ("name",)


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "city",
        "area",
        "property_type",
        "rent_amount",
        "total_amount",
        "is_available",
        "assigned_admin",
    )
    list_filter = ("is_available", "is_featured", "city", "property_type", "parking_available")
    search_fields = ("title", "city", "area", "assigned_admin__email")
    filter_horizontal = ("amenities",)
    readonly_fields = (
        "service_fee_amount",
        "total_amount",
        "views_count",
        "inquiries_count",
        "bookings_count",
        "created_at",
        "updated_at",
    )
