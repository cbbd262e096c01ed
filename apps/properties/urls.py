"""URL routing for the properties domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AmenityViewSet, PropertyViewSet, SearchPropertiesView

router = DefaultRouter()
router.register(r"amenities", AmenityViewSet, basename="amenity")
router.register(r"", PropertyViewSet, basename="property")

urlpatterns = [
    # Search endpoint, matched before the property detail route
    path("search/", SearchPropertiesView.as_view(), name="property-search"),
    path("", include(router.urls)),
]
