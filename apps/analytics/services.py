"""Services maintaining and reading employee KPIs."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, Optional

from django.db import transaction  # type: ignore
from django.db.models import Avg, Count, F, Q, Sum  # type: ignore
from django.utils import timezone  # type: ignore

from shared.domain.exceptions import ValidationFailed
from shared.domain.session import Role, Session

from .domain.kpi import EmployeeScore, LeaderboardSort, build_leaderboard, conversion_rate, sort_leaderboard
from .models import EmployeePerformance

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

KPI_FIELDS = (
    "properties_managed",
    "bookings_received",
    "bookings_approved",
    "bookings_completed",
    "conversion_rate",
    "average_response_time_hours",
    "tenant_satisfaction_rating",
    "revenue_generated",
    "occupancy_rate",
)


def month_start(day: Optional[date] = None) -> date:
    day = day or timezone.localdate()
    return day.replace(day=1)


def previous_month(day: Optional[date] = None) -> date:
    return month_start(month_start(day) - timedelta(days=1))


def _quantize(value: Any) -> Decimal:
    return Decimal(value).quantize(CENT)


def _bounded_conversion(received: int, approved: int) -> Decimal:
    # Approvals of last month's requests can outnumber this month's arrivals
    return min(_quantize(conversion_rate(received, approved)), Decimal("100.00"))


def _bump(admin_id: Optional[int], field: str, *, refresh_conversion: bool = False) -> None:
    if admin_id is None:
        return
    row, _ = EmployeePerformance.objects.get_or_create(admin_id=admin_id, month_year=month_start())
    EmployeePerformance.objects.filter(pk=row.pk).update(**{field: F(field) + 1})
    if refresh_conversion:
        row.refresh_from_db(fields=["bookings_received", "bookings_approved"])
        row.conversion_rate = _bounded_conversion(row.bookings_received, row.bookings_approved)
        row.save(update_fields=["conversion_rate", "updated_at"])


def record_booking_received(admin_id: Optional[int]) -> None:
    _bump(admin_id, "bookings_received", refresh_conversion=True)


def record_booking_approved(admin_id: Optional[int]) -> None:
    _bump(admin_id, "bookings_approved", refresh_conversion=True)


def record_booking_completed(admin_id: Optional[int]) -> None:
    _bump(admin_id, "bookings_completed")


def build_monthly_snapshot(admin_id: int, month: date) -> dict[str, Any]:
    """Recompute one admin's KPIs for a month from booking requests and properties."""
    from apps.bookings.models import BookingRequest
    from apps.properties.models import Property

    month = month_start(month)
    bookings = BookingRequest.objects.filter(
        admin_id=admin_id,
        created_at__year=month.year,
        created_at__month=month.month,
    )
    counts = bookings.aggregate(
        received=Count("id"),
        approved=Count("id", filter=Q(status__in=["approved", "completed"])),
        completed=Count("id", filter=Q(status="completed")),
        satisfaction=Avg("feedback_rating"),
        revenue=Sum("property__service_fee_amount", filter=Q(status="completed")),
    )

    response_hours = [
        (responded_at - created_at).total_seconds() / 3600
        for created_at, responded_at in bookings.filter(responded_at__isnull=False).values_list(
            "created_at", "responded_at"
        )
    ]
    average_response = (
        _quantize(str(sum(response_hours) / len(response_hours))) if response_hours else Decimal("0.00")
    )

    managed = Property.objects.filter(assigned_admin_id=admin_id)
    properties_managed = managed.count()
    let_out = managed.filter(is_available=False).count()
    occupancy = _quantize(Decimal(let_out) * 100 / properties_managed) if properties_managed else Decimal("0.00")

    return {
        "properties_managed": properties_managed,
        "bookings_received": counts["received"],
        "bookings_approved": counts["approved"],
        "bookings_completed": counts["completed"],
        "conversion_rate": _bounded_conversion(counts["received"], counts["approved"]),
        "average_response_time_hours": average_response,
        "tenant_satisfaction_rating": _quantize(counts["satisfaction"] or 0),
        "revenue_generated": _quantize(counts["revenue"] or 0),
        "occupancy_rate": occupancy,
    }


def _upsert(admin_id: int, month: date, values: dict[str, Any]) -> EmployeePerformance:
    row, created = EmployeePerformance.objects.update_or_create(
        admin_id=admin_id,
        month_year=month_start(month),
        defaults={key: values[key] for key in KPI_FIELDS if key in values},
    )
    logger.info(f"Performance row {'created' if created else 'updated'} for admin {admin_id} {row.month_year}")
    return row


@transaction.atomic
def take_snapshot(admin_id: int, month: Optional[date] = None) -> EmployeePerformance:
    """Recompute and store one admin's row for `month` (default: this month)."""
    month = month_start(month)
    return _upsert(admin_id, month, build_monthly_snapshot(admin_id, month))


def snapshot_all(admin_ids: Iterable[int], month: Optional[date] = None) -> int:
    refreshed = 0
    for admin_id in admin_ids:
        take_snapshot(admin_id, month)
        refreshed += 1
    return refreshed


@transaction.atomic
def upsert_performance(session: Session, *, admin, month_year: date, values: dict[str, Any]) -> EmployeePerformance:
    """Insert or overwrite one admin's row for a month. Super admins only."""
    session.require(Role.SUPER_ADMIN)
    if getattr(admin, "role", None) != Role.PROPERTY_ADMIN.value:
        raise ValidationFailed({"admin": "Performance is only tracked for property admins."})
    return _upsert(admin.pk, month_year, values)


def performance_rows_for(session: Session):
    """Rows visible to the session: all for super admins, their own for property admins."""
    session.require(Role.SUPER_ADMIN, Role.PROPERTY_ADMIN)
    qs = EmployeePerformance.objects.select_related("admin")
    if session.is_property_admin:
        qs = qs.filter(admin_id=session.user_id)
    return qs


def leaderboard(session: Session, sort_by: LeaderboardSort = LeaderboardSort.RANK) -> list[EmployeeScore]:
    """Rank property admins by their newest month's KPIs."""
    session.require(Role.SUPER_ADMIN)
    rows = EmployeePerformance.objects.filter(admin__role=Role.PROPERTY_ADMIN.value)
    return sort_leaderboard(build_leaderboard(row.to_row() for row in rows), sort_by)
