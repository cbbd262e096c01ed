"""FilterSet definitions for property listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Count, Q  # type: ignore

from .models import Property


class PropertyFilterSet(django_filters.FilterSet):
    """Database-side filters for the property list endpoint."""

    city = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    area = django_filters.CharFilter(field_name="area", lookup_expr="icontains")
    property_type = django_filters.ChoiceFilter(choices=Property.PropertyType.choices)

    price_min = django_filters.NumberFilter(field_name="rent_amount", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="rent_amount", lookup_expr="lte")
    bedrooms = django_filters.NumberFilter(field_name="bedrooms", lookup_expr="gte")
    bathrooms = django_filters.NumberFilter(field_name="bathrooms", lookup_expr="gte")
    admin = django_filters.NumberFilter(field_name="assigned_admin_id")
    is_featured = django_filters.BooleanFilter(field_name="is_featured")

    # CSV of amenity names, requires all selected amenities
    amenities = django_filters.CharFilter(method="filter_amenities")

    class Meta:
        model = Property
        fields = [
            "city",
            "area",
            "property_type",
        ]

    def filter_amenities(self, queryset, name, value):  # type: ignore
        names = [part.strip() for part in str(value or "").split(",") if part.strip()]
        if not names:
            return queryset
        # Require all of the amenities: annotate count of matched amenities
        qs = queryset.filter(amenities__name__in=names).annotate(
            matched_amenities=Count("amenities", filter=Q(amenities__name__in=names), distinct=True)
        ).filter(matched_amenities=len(set(names)))
        return qs.distinct()
