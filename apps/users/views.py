"""User API views."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from .api.permissions import IsSelfOrSuperAdmin, IsSuperAdmin
from .serializers import (
    UserAdminUpdateSerializer,
    UserCreateSerializer,
    UserProfileUpdateSerializer,
    UserSerializer,
)

User = get_user_model()


class UserViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """User profiles.

    - `me` returns the current user's profile
    - users read and edit their own profile, super admins anyone's
    - listing and creating users is reserved to super admins
    """

    serializer_class = UserSerializer
    queryset = User.objects.all()

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "create"}:
            return [permissions.IsAuthenticated(), IsSuperAdmin()]
        return [permissions.IsAuthenticated(), IsSelfOrSuperAdmin()]

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return UserCreateSerializer
        if self.action in {"update", "partial_update"}:
            user = self.request.user
            if hasattr(user, "is_super_admin") and user.is_super_admin():
                return UserAdminUpdateSerializer
            return UserProfileUpdateSerializer
        return UserSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(UserSerializer(serializer.instance).data)

    @action(detail=False, methods=["get"])
    def me(self, request):
        """Current user's profile."""
        serializer = UserSerializer(request.user)
        return Response(serializer.data)
