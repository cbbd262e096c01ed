"""Serializers for the employee management API."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.models import CustomUser, PHONE_VALIDATOR


class EmployeeListSerializer(serializers.ModelSerializer):
    """Serializer for listing property admins."""

    properties_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = CustomUser
        fields = [
            "id",
            "email",
            "full_name",
            "phone",
            "role",
            "avatar_url",
            "employee_id",
            "hired_date",
            "performance_rating",
            "is_active",
            "is_verified",
            "created_at",
            "updated_at",
            "properties_count",
        ]
        read_only_fields = fields


class EmployeeInviteSerializer(serializers.Serializer):
    """Payload for inviting a new property admin."""

    email = serializers.EmailField()
    full_name = serializers.CharField(max_length=255)
    phone = serializers.CharField(
        max_length=20,
        required=False,
        allow_blank=True,
        validators=[PHONE_VALIDATOR],
    )


class EmployeeUpdateSerializer(serializers.ModelSerializer):
    """Profile fields a super admin edits on an employee."""

    class Meta:
        model = CustomUser
        fields = ["full_name", "phone", "avatar_url", "performance_rating", "is_verified"]


class EmployeeActivationSerializer(serializers.Serializer):
    employee_id = serializers.CharField(max_length=50)
    hired_date = serializers.DateField()


class PropertyAssignmentSerializer(serializers.Serializer):
    property_ids = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=False,
    )
