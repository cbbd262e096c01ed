"""API views for analytics.

Employee KPIs (monthly rows, snapshots and the leaderboard) for super
admins, each property admin's own rows, and an overview of platform
activity scoped to the caller's role.
"""

from __future__ import annotations

from dataclasses import asdict
from decimal import Decimal

from django.contrib.auth import get_user_model  # type: ignore
from django.db import models  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.bookings.models import BookingRequest
from apps.properties.models import Property
from apps.users.api.permissions import IsPlatformAdmin, IsSuperAdmin
from shared.domain.session import Session

from . import services
from .domain.kpi import LeaderboardSort
from .serializers import (
    EmployeePerformanceSerializer,
    EmployeeScoreSerializer,
    LeaderboardQuerySerializer,
    PerformanceUpsertSerializer,
    SnapshotRequestSerializer,
)

User = get_user_model()


class PerformanceViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Monthly KPI rows; `?admin=` and `?month_year=` narrow the list."""

    serializer_class = EmployeePerformanceSerializer
    permission_classes = [IsAuthenticated, IsPlatformAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["admin", "month_year"]

    def get_permissions(self):  # type: ignore
        if self.action in {"upsert", "snapshot"}:
            return [IsAuthenticated(), IsSuperAdmin()]
        return super().get_permissions()

    def get_queryset(self):  # type: ignore
        return services.performance_rows_for(Session.from_user(self.request.user))

    @action(detail=False, methods=["post"])
    def upsert(self, request):  # type: ignore
        serializer = PerformanceUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        values = dict(serializer.validated_data)
        admin = values.pop("admin")
        month_year = values.pop("month_year")
        row = services.upsert_performance(
            Session.from_user(request.user),
            admin=admin,
            month_year=month_year,
            values=values,
        )
        return Response(EmployeePerformanceSerializer(row).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"])
    def snapshot(self, request):  # type: ignore
        """Recompute one admin's month from bookings and properties."""
        serializer = SnapshotRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        row = services.take_snapshot(
            serializer.validated_data["admin"].pk,
            serializer.validated_data["month_year"],
        )
        return Response(EmployeePerformanceSerializer(row).data, status=status.HTTP_200_OK)


class LeaderboardView(APIView):
    """Property admins ranked by score; `?sort=` picks another ordering."""

    permission_classes = [IsAuthenticated, IsSuperAdmin]

    def get(self, request, format=None):  # type: ignore
        query = LeaderboardQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        scores = services.leaderboard(Session.from_user(request.user), LeaderboardSort(query.validated_data["sort"]))

        names = dict(
            User.objects.filter(pk__in=[score.admin_id for score in scores]).values_list("pk", "full_name")
        )
        rows = [{**asdict(score), "admin_name": names.get(score.admin_id, "")} for score in scores]
        return Response(
            {
                "sort": query.validated_data["sort"],
                "results": EmployeeScoreSerializer(rows, many=True).data,
            }
        )


class OverviewAnalyticsView(APIView):
    """Return general statistics for the platform or a specific user."""

    permission_classes = [IsAuthenticated]

    def get(self, request, format=None):  # type: ignore
        user = request.user
        # Scope: super admin sees all, property admin their own properties, tenant their requests
        if hasattr(user, "is_super_admin") and user.is_super_admin():
            prop_qs = Property.objects.all()
            booking_qs = BookingRequest.objects.all()
        elif hasattr(user, "is_property_admin") and user.is_property_admin():
            prop_qs = Property.objects.filter(assigned_admin=user)
            booking_qs = BookingRequest.objects.filter(admin=user)
        else:
            prop_qs = Property.objects.none()
            booking_qs = BookingRequest.objects.filter(tenant=user)

        by_status = dict(
            booking_qs.order_by()
            .values("status")
            .annotate(total=models.Count("id"))
            .values_list("status", "total")
        )
        completed = booking_qs.filter(status=BookingRequest.Status.COMPLETED)
        total_revenue = (
            completed.aggregate(total=models.Sum("property__service_fee_amount")).get("total") or Decimal("0")
        )
        avg_rating = completed.aggregate(avg=models.Avg("feedback_rating")).get("avg") or None

        return Response(
            {
                "properties": prop_qs.count(),
                "available_properties": prop_qs.filter(is_available=True).count(),
                "views": prop_qs.aggregate(total=models.Sum("views_count")).get("total") or 0,
                "bookings": booking_qs.count(),
                "bookings_by_status": {
                    choice: by_status.get(choice, 0) for choice in BookingRequest.Status.values
                },
                "revenue": total_revenue,
                "avg_rating": avg_rating,
            }
        )
