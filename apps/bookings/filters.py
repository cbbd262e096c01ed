"""Filters for the booking request list."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import BookingRequest


class BookingRequestFilterSet(django_filters.FilterSet):
    """`?status=` and `?search=` over tenant name/email and property title/area."""

    status = django_filters.ChoiceFilter(choices=BookingRequest.Status.choices)
    search = django_filters.CharFilter(method="filter_search")
    property = django_filters.NumberFilter(field_name="property_id")

    class Meta:
        model = BookingRequest
        fields = ["status", "property"]

    def filter_search(self, queryset, name, value):  # type: ignore
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(
            Q(tenant_name__icontains=value)
            | Q(tenant_email__icontains=value)
            | Q(property__title__icontains=value)
            | Q(property__area__icontains=value)
        )
