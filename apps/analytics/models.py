"""Monthly KPI rows for property admins."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.kpi import PerformanceRow


class EmployeePerformance(models.Model):
    """One property admin's KPIs for one calendar month.

    `month_year` is always the first day of the month. Rows are written by
    upsert only, so (admin, month_year) stays unique.
    """

    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="performance_rows",
    )
    month_year = models.DateField()

    properties_managed = models.PositiveIntegerField(default=0)
    bookings_received = models.PositiveIntegerField(default=0)
    bookings_approved = models.PositiveIntegerField(default=0)
    bookings_completed = models.PositiveIntegerField(default=0)
    conversion_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )
    average_response_time_hours = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    tenant_satisfaction_rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("5"))],
    )
    revenue_generated = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    occupancy_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("100"))],
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Employee performance")
        verbose_name_plural = _("Employee performance")
        ordering = ["-month_year", "admin"]
        constraints = [
            models.UniqueConstraint(
                fields=["admin", "month_year"],
                name="unique_admin_performance_month",
            ),
        ]
        indexes = [
            models.Index(fields=["month_year"], name="performance_month_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.admin_id} {self.month_year:%Y-%m}"

    def to_row(self) -> PerformanceRow:
        return PerformanceRow(
            admin_id=self.admin_id,
            month_year=self.month_year,
            conversion_rate=self.conversion_rate,
            average_response_time_hours=self.average_response_time_hours,
            tenant_satisfaction_rating=self.tenant_satisfaction_rating,
            revenue_generated=self.revenue_generated,
            occupancy_rate=self.occupancy_rate,
            properties_managed=self.properties_managed,
            bookings_received=self.bookings_received,
            bookings_approved=self.bookings_approved,
            bookings_completed=self.bookings_completed,
        )
