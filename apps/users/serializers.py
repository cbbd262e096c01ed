"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR, CustomUserManager

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    role_display = serializers.CharField(source="get_role_display", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "full_name",
            "phone",
            "role",
            "role_display",
            "avatar_url",
            "is_verified",
            "is_active",
            "employee_id",
            "hired_date",
            "performance_rating",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "role_display",
            "is_verified",
            "is_active",
            "employee_id",
            "hired_date",
            "performance_rating",
            "created_at",
            "updated_at",
        ]


class UserProfileUpdateSerializer(serializers.ModelSerializer):
    """Fields a user may change on their own profile."""

    phone = serializers.CharField(
        required=False,
        allow_blank=True,
        allow_null=True,
        validators=[PHONE_VALIDATOR],
    )

    class Meta:
        model = User
        fields = ["full_name", "phone", "avatar_url"]

    def to_internal_value(self, data):  # type: ignore
        if hasattr(data, "copy"):
            data = data.copy()
        phone = data.get("phone") if hasattr(data, "get") else None
        if phone:
            data["phone"] = CustomUserManager.normalize_phone(phone)
        return super().to_internal_value(data)


class UserAdminUpdateSerializer(UserProfileUpdateSerializer):
    """Super admins may additionally edit role and verification attributes."""

    class Meta(UserProfileUpdateSerializer.Meta):
        fields = UserProfileUpdateSerializer.Meta.fields + [
            "role",
            "is_verified",
            "performance_rating",
        ]


class UserCreateSerializer(serializers.ModelSerializer):
    """Creation of a user profile by a super admin."""

    password = serializers.CharField(write_only=True, required=False, min_length=8)

    class Meta:
        model = User
        fields = ["email", "full_name", "phone", "role", "password"]

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def create(self, validated_data):  # type: ignore
        password = validated_data.pop("password", None)
        return User.objects.create_user(password=password, **validated_data)
