"""Serializers for the properties domain."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

from .domain.search import SearchFilters, SortOption
from .models import Amenity, Property

User = get_user_model()


class AmenitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Amenity
        fields = ["id", "name", "category", "icon"]


class PropertySerializer(serializers.ModelSerializer):
    """Read serializer; amenities are returned as a list of names."""

    assigned_admin_id = serializers.ReadOnlyField(source="assigned_admin.id")
    assigned_admin_name = serializers.ReadOnlyField(source="assigned_admin.full_name")
    amenities = serializers.SlugRelatedField(many=True, read_only=True, slug_field="name")

    class Meta:
        model = Property
        fields = [
            "id",
            "assigned_admin_id",
            "assigned_admin_name",
            "title",
            "description",
            "property_type",
            "bedrooms",
            "bathrooms",
            "square_footage",
            "rent_amount",
            "service_fee_amount",
            "total_amount",
            "city",
            "area",
            "full_address",
            "images",
            "amenities",
            "pet_policy",
            "parking_available",
            "is_available",
            "is_featured",
            "views_count",
            "inquiries_count",
            "bookings_count",
            "occupancy_rate",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PropertyWriteSerializer(serializers.ModelSerializer):
    """Serializer for create/update operations.

    Fee fields are not writable: they are derived from `rent_amount`.
    """

    amenities = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
    )
    images = serializers.ListField(
        child=serializers.URLField(),
        required=False,
    )
    assigned_admin = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role="property_admin"),
        allow_null=True,
        required=False,
    )

    class Meta:
        model = Property
        fields = [
            "assigned_admin",
            "title",
            "description",
            "property_type",
            "bedrooms",
            "bathrooms",
            "square_footage",
            "rent_amount",
            "city",
            "area",
            "full_address",
            "images",
            "amenities",
            "pet_policy",
            "parking_available",
            "is_available",
            "is_featured",
            "occupancy_rate",
        ]

    def validate_rent_amount(self, value):  # type: ignore
        if value < 0:
            raise serializers.ValidationError("Rent amount cannot be negative.")
        return value


class PropertySearchParamsSerializer(serializers.Serializer):
    """Query parameters of the search endpoint."""

    VIEW_SEARCH = "search"
    VIEW_BROWSER = "browser"

    q = serializers.CharField(required=False, allow_blank=True, default="")
    city = serializers.CharField(required=False, allow_blank=True, default="")
    price_min = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    price_max = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    property_type = serializers.ChoiceField(
        choices=Property.PropertyType.choices,
        required=False,
        allow_blank=True,
        default="",
    )
    bedrooms = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    bathrooms = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    amenities = serializers.CharField(required=False, allow_blank=True, default="")
    sort = serializers.ChoiceField(
        choices=[option.value for option in SortOption],
        required=False,
        default=SortOption.FEATURED.value,
    )
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    view = serializers.ChoiceField(
        choices=[VIEW_SEARCH, VIEW_BROWSER],
        required=False,
        default=VIEW_SEARCH,
    )
    request_token = serializers.IntegerField(min_value=0, required=False, allow_null=True)

    def to_filters(self) -> SearchFilters:
        data = self.validated_data
        return SearchFilters(
            city=data.get("city", ""),
            price_min=data.get("price_min"),
            price_max=data.get("price_max"),
            property_type=data.get("property_type", ""),
            bedrooms=data.get("bedrooms"),
            bathrooms=data.get("bathrooms"),
            amenities=tuple(
                name.strip() for name in data.get("amenities", "").split(",") if name.strip()
            ),
        )
