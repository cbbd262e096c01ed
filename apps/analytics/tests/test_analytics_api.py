"""Tests for employee performance analytics."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.analytics import services
from apps.analytics.models import EmployeePerformance
from apps.analytics.tasks import refresh_employee_performance
from apps.bookings.models import BookingRequest
from apps.properties.models import Property
from apps.users.models import User


def make_user(email, role=User.RoleChoices.PROPERTY_ADMIN, **kwargs) -> User:
    return User.objects.create_user(
        email=email,
        password="StrongPass123",
        full_name=email.split("@")[0].title(),
        role=role,
        **kwargs,
    )


class PerformanceAPITests(APITestCase):
    def setUp(self) -> None:
        self.super_admin = make_user("boss@example.com", User.RoleChoices.SUPER_ADMIN)
        self.admin = make_user("baraka@example.com")
        self.other_admin = make_user("halima@example.com")
        self.tenant = make_user("amina@example.com", User.RoleChoices.TENANT)

    def book(self, property_obj, status_value, **kwargs) -> BookingRequest:
        return BookingRequest.objects.create(
            property=property_obj,
            tenant=self.tenant,
            admin=self.admin,
            tenant_name="Amina",
            tenant_phone="0712345678",
            tenant_email="amina@example.com",
            preferred_viewing_date=timezone.localdate() + timedelta(days=1),
            preferred_viewing_time="10:00",
            status=status_value,
            **kwargs,
        )

    def test_snapshot_recomputes_month(self) -> None:
        let_out = Property.objects.create(
            assigned_admin=self.admin,
            title="Let flat",
            city="Dar es Salaam",
            rent_amount=Decimal("500000"),
            is_available=False,
        )
        listed = Property.objects.create(
            assigned_admin=self.admin,
            title="Listed flat",
            city="Dar es Salaam",
            rent_amount=Decimal("300000"),
        )
        completed = self.book(let_out, BookingRequest.Status.COMPLETED, feedback_rating=4)
        approved = self.book(listed, BookingRequest.Status.APPROVED)
        self.book(listed, BookingRequest.Status.PENDING)
        self.book(listed, BookingRequest.Status.DECLINED)
        for booking, hours in ((completed, 2), (approved, 4)):
            booking.responded_at = booking.created_at + timedelta(hours=hours)
            booking.save(update_fields=["responded_at"])

        self.client.force_authenticate(self.super_admin)
        response = self.client.post(reverse("performance-snapshot"), {"admin": self.admin.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["bookings_received"], 4)
        self.assertEqual(response.data["bookings_approved"], 2)
        self.assertEqual(response.data["bookings_completed"], 1)
        self.assertEqual(response.data["conversion_rate"], "50.00")
        self.assertEqual(response.data["average_response_time_hours"], "3.00")
        self.assertEqual(response.data["tenant_satisfaction_rating"], "4.00")
        self.assertEqual(response.data["revenue_generated"], "100000.00")
        self.assertEqual(response.data["properties_managed"], 2)
        self.assertEqual(response.data["occupancy_rate"], "50.00")

        # A second snapshot overwrites the same row
        self.client.post(reverse("performance-snapshot"), {"admin": self.admin.id}, format="json")
        self.assertEqual(EmployeePerformance.objects.filter(admin=self.admin).count(), 1)

    def test_upsert_normalises_month(self) -> None:
        self.client.force_authenticate(self.super_admin)
        url = reverse("performance-upsert")
        response = self.client.post(
            url,
            {"admin": self.admin.id, "month_year": "2026-03-15", "conversion_rate": "40.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["month_year"], "2026-03-01")

        self.client.post(
            url,
            {"admin": self.admin.id, "month_year": "2026-03-01", "conversion_rate": "45.50"},
            format="json",
        )
        row = EmployeePerformance.objects.get(admin=self.admin)
        self.assertEqual(row.conversion_rate, Decimal("45.50"))

    def test_upsert_rejects_tenants_as_admin(self) -> None:
        self.client.force_authenticate(self.super_admin)
        response = self.client.post(
            reverse("performance-upsert"),
            {"admin": self.tenant.id, "month_year": "2026-03-01"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_property_admin_sees_own_rows(self) -> None:
        EmployeePerformance.objects.create(admin=self.admin, month_year=date(2026, 3, 1))
        EmployeePerformance.objects.create(admin=self.other_admin, month_year=date(2026, 3, 1))

        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("performance-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["admin_id"] for item in response.data["results"]], [self.admin.id])

        response = self.client.post(
            reverse("performance-upsert"),
            {"admin": self.admin.id, "month_year": "2026-03-01"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_super_admin_filters_by_admin(self) -> None:
        EmployeePerformance.objects.create(admin=self.admin, month_year=date(2026, 3, 1))
        EmployeePerformance.objects.create(admin=self.other_admin, month_year=date(2026, 3, 1))

        self.client.force_authenticate(self.super_admin)
        response = self.client.get(reverse("performance-list"), {"admin": self.other_admin.id})
        self.assertEqual(response.data["count"], 1)

    def test_tenant_cannot_read_performance(self) -> None:
        self.client.force_authenticate(self.tenant)
        response = self.client.get(reverse("performance-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_leaderboard(self) -> None:
        EmployeePerformance.objects.create(
            admin=self.admin,
            month_year=date(2026, 4, 1),
            conversion_rate=Decimal("10"),
            average_response_time_hours=Decimal("8"),
        )
        EmployeePerformance.objects.create(
            admin=self.other_admin,
            month_year=date(2026, 4, 1),
            conversion_rate=Decimal("20"),
            average_response_time_hours=Decimal("9"),
        )
        self.client.force_authenticate(self.super_admin)

        response = self.client.get(reverse("analytics-leaderboard"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        results = response.data["results"]
        self.assertEqual([item["admin_id"] for item in results], [self.other_admin.id, self.admin.id])
        self.assertEqual(results[0]["rank"], 1)
        self.assertEqual(results[0]["admin_name"], "Halima")

        response = self.client.get(reverse("analytics-leaderboard"), {"sort": "response"})
        self.assertEqual(response.data["results"][0]["admin_id"], self.admin.id)

    def test_leaderboard_is_for_super_admins(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("analytics-leaderboard"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_overview_for_property_admin(self) -> None:
        mine = Property.objects.create(
            assigned_admin=self.admin, title="Mine", city="Dodoma", rent_amount=Decimal("200000")
        )
        Property.objects.create(
            assigned_admin=self.other_admin, title="Theirs", city="Dodoma", rent_amount=Decimal("200000")
        )
        self.book(mine, BookingRequest.Status.COMPLETED, feedback_rating=5)
        self.book(mine, BookingRequest.Status.PENDING)

        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("analytics-overview"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["properties"], 1)
        self.assertEqual(response.data["bookings"], 2)
        self.assertEqual(response.data["bookings_by_status"]["completed"], 1)
        self.assertEqual(response.data["bookings_by_status"]["cancelled"], 0)
        self.assertEqual(response.data["revenue"], Decimal("40000"))


@pytest.mark.django_db
def test_nightly_refresh_covers_active_admins() -> None:
    active = make_user("active@example.com")
    make_user("inactive@example.com", is_active=False)

    result = refresh_employee_performance()

    assert result == {"refreshed": 1}
    assert list(EmployeePerformance.objects.values_list("admin_id", flat=True)) == [active.id]


@pytest.mark.django_db
def test_booking_counters_recompute_conversion() -> None:
    admin = make_user("agent@example.com")
    services.record_booking_received(admin.id)
    services.record_booking_received(admin.id)
    services.record_booking_approved(admin.id)

    row = EmployeePerformance.objects.get(admin=admin)
    assert row.month_year == services.month_start()
    assert row.bookings_received == 2
    assert row.bookings_approved == 1
    assert row.conversion_rate == Decimal("50.00")


def test_previous_month() -> None:
    assert services.previous_month(date(2026, 1, 20)) == date(2025, 12, 1)
    assert services.month_start(date(2026, 2, 28)) == date(2026, 2, 1)
