"""URL declarations for the users app."""

from __future__ import annotations

from django.urls import path, include  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import UserViewSet

router = DefaultRouter()
router.register(r'', UserViewSet, basename='user')

urlpatterns = [
    # Employee routes come first so "employees" is not read as a user id
    path('', include('apps.users.api.urls')),
    path('', include(router.urls)),
]
