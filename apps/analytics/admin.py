"""Admin registration for employee performance."""

from __future__ import annotations

from django.contrib import admin

from .models import EmployeePerformance


@admin.register(EmployeePerformance)
class EmployeePerformanceAdmin(admin.ModelAdmin):
    list_display = (
        "admin",
        "month_year",
        "bookings_received",
        "bookings_approved",
        "bookings_completed",
        "conversion_rate",
        "tenant_satisfaction_rating",
        "occupancy_rate",
    )
    list_filter = ("month_year",)
    search_fields = ("admin__email", "admin__full_name")
    date_hierarchy = "month_year"
