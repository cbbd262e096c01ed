"""Serializers for employee performance analytics."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .domain.kpi import LeaderboardSort
from .models import EmployeePerformance

User = get_user_model()


class EmployeePerformanceSerializer(serializers.ModelSerializer):
    admin_id = serializers.ReadOnlyField(source="admin.id")
    admin_name = serializers.ReadOnlyField(source="admin.full_name")

    class Meta:
        model = EmployeePerformance
        fields = [
            "id",
            "admin_id",
            "admin_name",
            "month_year",
            "properties_managed",
            "bookings_received",
            "bookings_approved",
            "bookings_completed",
            "conversion_rate",
            "average_response_time_hours",
            "tenant_satisfaction_rating",
            "revenue_generated",
            "occupancy_rate",
            "updated_at",
        ]
        read_only_fields = fields


class PerformanceUpsertSerializer(serializers.ModelSerializer):
    """Payload for writing one admin's month; missing KPI fields keep their value."""

    admin = serializers.PrimaryKeyRelatedField(queryset=User.objects.filter(role="property_admin"))

    class Meta:
        model = EmployeePerformance
        fields = [
            "admin",
            "month_year",
            "properties_managed",
            "bookings_received",
            "bookings_approved",
            "bookings_completed",
            "conversion_rate",
            "average_response_time_hours",
            "tenant_satisfaction_rating",
            "revenue_generated",
            "occupancy_rate",
        ]
        # Upsert, not create: the (admin, month_year) constraint is resolved by the service
        validators = []
        extra_kwargs = {
            field: {"required": False}
            for field in fields
            if field not in {"admin", "month_year"}
        }


class SnapshotRequestSerializer(serializers.Serializer):
    admin = serializers.PrimaryKeyRelatedField(queryset=User.objects.filter(role="property_admin"))
    month_year = serializers.DateField(required=False, allow_null=True, default=None)


class LeaderboardQuerySerializer(serializers.Serializer):
    sort = serializers.ChoiceField(
        choices=[option.value for option in LeaderboardSort],
        required=False,
        default=LeaderboardSort.RANK.value,
    )


class EmployeeScoreSerializer(serializers.Serializer):
    rank = serializers.IntegerField()
    admin_id = serializers.IntegerField()
    admin_name = serializers.CharField()
    month_year = serializers.DateField()
    total_score = serializers.DecimalField(max_digits=None, decimal_places=2)
    conversion_rate = serializers.DecimalField(max_digits=None, decimal_places=2)
    response_time_hours = serializers.DecimalField(max_digits=None, decimal_places=2)
    satisfaction_rating = serializers.DecimalField(max_digits=None, decimal_places=2)
    revenue = serializers.DecimalField(max_digits=None, decimal_places=2)
    occupancy_rate = serializers.DecimalField(max_digits=None, decimal_places=2)
    properties_managed = serializers.IntegerField()
    conversion_trend = serializers.DecimalField(max_digits=None, decimal_places=2)
    response_trend = serializers.DecimalField(max_digits=None, decimal_places=2)
    satisfaction_trend = serializers.DecimalField(max_digits=None, decimal_places=2)
    revenue_trend = serializers.DecimalField(max_digits=None, decimal_places=2)
    occupancy_trend = serializers.DecimalField(max_digits=None, decimal_places=2)
