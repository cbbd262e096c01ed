"""Serializers for the booking domain."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.properties.models import Property

from .domain.validation import validate_booking_request, validate_feedback
from .models import BookingRequest


class BookingRequestCreateSerializer(serializers.Serializer):
    """Viewing request submitted by a tenant.

    Fields are loosely typed here so that every problem is reported with
    the booking form's own messages.
    """

    property = serializers.PrimaryKeyRelatedField(queryset=Property.objects.all())
    tenant_name = serializers.CharField(required=False, allow_blank=True, default="", max_length=255)
    tenant_phone = serializers.CharField(required=False, allow_blank=True, default="")
    tenant_email = serializers.CharField(required=False, allow_blank=True, default="", max_length=254)
    preferred_viewing_date = serializers.DateField(required=False, allow_null=True, default=None)
    preferred_viewing_time = serializers.TimeField(required=False, allow_null=True, default=None)
    message = serializers.CharField(required=False, allow_blank=True, default="")
    status = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        errors = validate_booking_request(attrs, today=timezone.localdate())
        if errors:
            raise serializers.ValidationError(errors)
        return attrs


class BookingRequestSerializer(serializers.ModelSerializer):
    """Detailed booking request, with a summary of the property."""

    property_id = serializers.ReadOnlyField(source="property.id")
    property_title = serializers.ReadOnlyField(source="property.title")
    property_area = serializers.ReadOnlyField(source="property.area")
    tenant_id = serializers.ReadOnlyField(source="tenant.id")
    admin_id = serializers.ReadOnlyField(source="admin.id")

    class Meta:
        model = BookingRequest
        fields = [
            "id",
            "property_id",
            "property_title",
            "property_area",
            "tenant_id",
            "admin_id",
            "tenant_name",
            "tenant_phone",
            "tenant_email",
            "preferred_viewing_date",
            "preferred_viewing_time",
            "message",
            "status",
            "admin_response",
            "scheduled_date",
            "responded_at",
            "feedback_rating",
            "feedback_comment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ApproveBookingSerializer(serializers.Serializer):
    scheduled_date = serializers.DateTimeField(required=False, allow_null=True, default=None)
    admin_response = serializers.CharField(required=False, allow_blank=True, default="")


class DeclineBookingSerializer(serializers.Serializer):
    admin_response = serializers.CharField(required=False, allow_blank=True, default="")


class CancelBookingSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class FeedbackSerializer(serializers.Serializer):
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_rating(self, value):  # type: ignore
        errors = validate_feedback(value)
        if errors:
            raise serializers.ValidationError(errors["feedback_rating"])
        return value
