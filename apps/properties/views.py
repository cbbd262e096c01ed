"""Property API views."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.api.permissions import IsPlatformAdmin, IsSuperAdmin
from shared.domain.session import Session

from . import services
from .domain.search import MAIN_SEARCH, TENANT_BROWSER, SortOption
from .filters import PropertyFilterSet
from .models import Amenity, Property
from .serializers import (
    AmenitySerializer,
    PropertySearchParamsSerializer,
    PropertySerializer,
    PropertyWriteSerializer,
)


class PropertyViewSet(viewsets.ModelViewSet):
    """Viewset for browsing and managing properties.

    - list: available properties only, newest first, filterable
    - retrieve: any property by id
    - create/update/destroy: super admins, or the property's assigned admin
    - destroy retires the property unless a super admin deletes it
    """

    queryset = Property.objects.select_related("assigned_admin").prefetch_related("amenities")
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = PropertyFilterSet
    ordering_fields = [
        "rent_amount",
        "created_at",
        "is_featured",
        "bedrooms",
    ]
    ordering = ["-created_at"]

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve", "increment_views"}:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), IsPlatformAdmin()]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        if self.action == "list":
            return qs.available()
        if self.action == "mine":
            return qs.managed_by(self.request.user)
        return qs

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return PropertyWriteSerializer
        return PropertySerializer

    def _session(self) -> Session:
        return Session.from_user(self.request.user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        amenity_names = data.pop("amenities", [])
        property_obj = services.create_property(
            self._session(),
            data,
            services.amenities_from_names(amenity_names),
        )
        read_serializer = PropertySerializer(property_obj, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        changes = dict(serializer.validated_data)
        amenity_names = changes.pop("amenities", None)
        amenities = services.amenities_from_names(amenity_names) if amenity_names is not None else None
        property_obj = services.update_property(self._session(), instance, changes, amenities)
        read_serializer = PropertySerializer(property_obj, context=self.get_serializer_context())
        return Response(read_serializer.data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        instance = self.get_object()
        deleted = services.remove_property(self._session(), instance)
        if deleted:
            return Response(status=status.HTTP_204_NO_CONTENT)
        return Response(PropertySerializer(instance).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="increment-views")
    def increment_views(self, request, pk=None):  # type: ignore
        """Count a view of the property detail page."""
        property_obj = self.get_object()
        services.increment_views(property_obj.pk)
        property_obj.refresh_from_db(fields=["views_count"])
        return Response({"id": property_obj.pk, "views_count": property_obj.views_count})

    @action(detail=False, methods=["get"])
    def mine(self, request):  # type: ignore
        """Properties assigned to the current admin, available or not."""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(PropertySerializer(page, many=True).data)
        return Response(PropertySerializer(queryset, many=True).data)


class SearchPropertiesView(APIView):
    """Free-text search with filters, sorting and a "load more" window.

    Runs the in-memory pipeline over every available property. The
    `request_token` sent by the client is echoed back so it can drop
    responses that arrive after a newer search was issued.
    """

    permission_classes = [permissions.AllowAny]

    def get(self, request):  # type: ignore
        params = PropertySearchParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        data = params.validated_data

        window = TENANT_BROWSER if data["view"] == PropertySearchParamsSerializer.VIEW_BROWSER else MAIN_SEARCH
        candidates = list(Property.objects.available().prefetch_related("amenities"))
        by_id = {property_obj.pk: property_obj for property_obj in candidates}

        page = services.search_listings(
            candidates,
            filters=params.to_filters(),
            query=data["q"],
            sort_by=SortOption(data["sort"]),
            window=window,
            page=data["page"],
        )
        results = PropertySerializer([by_id[listing.id] for listing in page.items], many=True).data
        return Response(
            {
                "request_token": data.get("request_token"),
                "count": page.total,
                "page": page.page,
                "page_size": window.page_size,
                "has_more": page.has_more,
                "results": results,
            }
        )


class AmenityViewSet(viewsets.ModelViewSet):
    """Amenity catalogue: readable by everyone, editable by super admins."""

    queryset = Amenity.objects.all()
    serializer_class = AmenitySerializer
    pagination_class = None

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), IsSuperAdmin()]
