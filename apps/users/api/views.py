"""API views for Super Admin employee management."""

from __future__ import annotations

from django.db import models  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users import services
from apps.users.models import CustomUser
from shared.domain.session import Session

from .permissions import IsSuperAdmin
from .serializers import (
    EmployeeActivationSerializer,
    EmployeeInviteSerializer,
    EmployeeListSerializer,
    EmployeeUpdateSerializer,
    PropertyAssignmentSerializer,
)


class EmployeeViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for Super Admin to manage property admins.

    Endpoints:
    - GET /api/v1/users/employees/ - list property admins (?search=, ?status=active|inactive)
    - POST /api/v1/users/employees/ - invite a new property admin
    - GET /api/v1/users/employees/{id}/ - employee details
    - PATCH /api/v1/users/employees/{id}/ - update employee profile
    - POST /api/v1/users/employees/{id}/activate/ - activate with employee id and hire date
    - POST /api/v1/users/employees/{id}/deactivate/ - deactivate
    - POST /api/v1/users/employees/{id}/assign-properties/ - bulk assign properties
    """

    permission_classes = [permissions.IsAuthenticated, IsSuperAdmin]

    def get_queryset(self):  # type: ignore
        qs = CustomUser.objects.employees().annotate(
            properties_count=models.Count("assigned_properties", distinct=True)
        )
        search = self.request.query_params.get("search", "").strip()
        if search:
            qs = qs.filter(
                models.Q(full_name__icontains=search)
                | models.Q(email__icontains=search)
                | models.Q(employee_id__icontains=search)
            )
        status_param = self.request.query_params.get("status")
        if status_param == "active":
            qs = qs.filter(is_active=True)
        elif status_param == "inactive":
            qs = qs.filter(is_active=False)
        return qs.order_by("full_name")

    def get_serializer_class(self) -> type:  # type: ignore
        if self.action in ["update", "partial_update"]:
            return EmployeeUpdateSerializer  # type: ignore
        return EmployeeListSerializer  # type: ignore

    def _session(self) -> Session:
        return Session.from_user(self.request.user)

    def _detail(self, employee: CustomUser) -> dict:
        employee = self.get_queryset().get(pk=employee.pk)
        return EmployeeListSerializer(employee).data

    def create(self, request, *args, **kwargs):  # type: ignore
        """Invite a new employee."""
        serializer = EmployeeInviteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        employee = services.invite_employee(self._session(), **serializer.validated_data)
        return Response(self._detail(employee), status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(self._detail(instance))

    @action(detail=True, methods=["post"], url_path="activate")
    def activate(self, request, pk=None):  # type: ignore
        """
        Activate an employee.

        POST /api/v1/users/employees/{id}/activate/
        Body: {"employee_id": "EMP-001", "hired_date": "2025-01-15"}
        """
        employee = self.get_object()
        serializer = EmployeeActivationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        services.activate_employee(self._session(), employee, **serializer.validated_data)
        return Response(self._detail(employee), status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="deactivate")
    def deactivate(self, request, pk=None):  # type: ignore
        """
        Deactivate an employee.

        POST /api/v1/users/employees/{id}/deactivate/

        Sets is_active=False, preventing login but preserving data.
        """
        employee = self.get_object()
        services.deactivate_employee(self._session(), employee)
        return Response(self._detail(employee), status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="assign-properties")
    def assign_properties(self, request, pk=None):  # type: ignore
        """
        Assign several properties to this employee at once.

        POST /api/v1/users/employees/{id}/assign-properties/
        Body: {"property_ids": [1, 2, 3]}

        All properties are assigned or none is.
        """
        employee = self.get_object()
        serializer = PropertyAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        assigned = services.assign_properties(
            self._session(), employee, serializer.validated_data["property_ids"]
        )
        return Response({"assigned": assigned, "employee": self._detail(employee)})
