"""Tests for the booking request API."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.analytics.models import EmployeePerformance
from apps.bookings.models import BookingRequest
from apps.bookings.tasks import notify_status_changed
from apps.properties.models import Property
from apps.users.models import User


class BookingRequestAPITests(APITestCase):
    def setUp(self) -> None:
        self.super_admin = User.objects.create_user(
            email="boss@example.com",
            password="StrongPass123",
            full_name="Neema Boss",
            role=User.RoleChoices.SUPER_ADMIN,
        )
        self.admin = User.objects.create_user(
            email="agent@example.com",
            password="StrongPass123",
            full_name="Baraka Agent",
            role=User.RoleChoices.PROPERTY_ADMIN,
        )
        self.other_admin = User.objects.create_user(
            email="agent2@example.com",
            password="StrongPass123",
            full_name="Halima Agent",
            role=User.RoleChoices.PROPERTY_ADMIN,
        )
        self.tenant = User.objects.create_user(
            email="tenant@example.com",
            password="StrongPass123",
            full_name="Amina Juma",
        )
        self.other_tenant = User.objects.create_user(
            email="tenant2@example.com",
            password="StrongPass123",
            full_name="Juma Said",
        )
        self.property = Property.objects.create(
            assigned_admin=self.admin,
            title="Sea view flat",
            city="Dar es Salaam",
            area="Msasani",
            rent_amount=Decimal("500000"),
        )
        self.tomorrow = timezone.localdate() + timedelta(days=1)

    def payload(self, **overrides) -> dict:
        data = {
            "property": self.property.id,
            "tenant_name": "Amina Juma",
            "tenant_phone": "0712 345 678",
            "tenant_email": "amina@example.com",
            "preferred_viewing_date": self.tomorrow.isoformat(),
            "preferred_viewing_time": "10:00",
            "message": "Is parking included?",
        }
        data.update(overrides)
        return data

    def create_request(self, **overrides) -> BookingRequest:
        defaults = {
            "property": self.property,
            "tenant": self.tenant,
            "admin": self.admin,
            "tenant_name": "Amina Juma",
            "tenant_phone": "0712345678",
            "tenant_email": "amina@example.com",
            "preferred_viewing_date": self.tomorrow,
            "preferred_viewing_time": "10:00",
        }
        defaults.update(overrides)
        return BookingRequest.objects.create(**defaults)

    def test_tenant_creates_request(self) -> None:
        self.client.force_authenticate(self.tenant)
        response = self.client.post(reverse("booking-list"), self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(response.data["admin_id"], self.admin.id)
        self.assertEqual(response.data["tenant_phone"], "0712345678")

        self.property.refresh_from_db()
        self.assertEqual(self.property.inquiries_count, 1)
        row = EmployeePerformance.objects.get(admin=self.admin)
        self.assertEqual(row.bookings_received, 1)

    def test_invalid_request_persists_nothing(self) -> None:
        self.client.force_authenticate(self.tenant)
        response = self.client.post(
            reverse("booking-list"),
            self.payload(tenant_phone="123456", preferred_viewing_time="13:00"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["tenant_phone"], ["Please enter a valid Tanzanian phone number"])
        self.assertEqual(response.data["preferred_viewing_time"], ["Please select a viewing time"])
        self.assertFalse(BookingRequest.objects.exists())
        self.property.refresh_from_db()
        self.assertEqual(self.property.inquiries_count, 0)

    def test_overlong_contact_fields_are_field_errors(self) -> None:
        self.client.force_authenticate(self.tenant)
        response = self.client.post(
            reverse("booking-list"),
            self.payload(tenant_name="A" * 300, tenant_email=f"{'a' * 250}@example.com"),
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["tenant_name"], ["Ensure this field has no more than 255 characters."])
        self.assertEqual(response.data["tenant_email"], ["Ensure this field has no more than 254 characters."])
        self.assertFalse(BookingRequest.objects.exists())

    def test_admin_cannot_create_request(self) -> None:
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("booking-list"), self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unavailable_property_is_rejected(self) -> None:
        self.property.retire()
        self.client.force_authenticate(self.tenant)
        response = self.client.post(reverse("booking-list"), self.payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("property", response.data)

    def test_list_is_scoped_by_role(self) -> None:
        mine = self.create_request()
        self.create_request(tenant=self.other_tenant, admin=self.other_admin, tenant_name="Juma Said")

        self.client.force_authenticate(self.tenant)
        response = self.client.get(reverse("booking-list"))
        self.assertEqual([item["id"] for item in response.data["results"]], [mine.id])

        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("booking-list"))
        self.assertEqual([item["id"] for item in response.data["results"]], [mine.id])

        self.client.force_authenticate(self.super_admin)
        response = self.client.get(reverse("booking-list"))
        self.assertEqual(response.data["count"], 2)

    def test_search_and_status_filter(self) -> None:
        self.create_request(tenant_name="Amina Juma")
        self.create_request(tenant_name="Zawadi Mushi", status=BookingRequest.Status.DECLINED)
        self.client.force_authenticate(self.super_admin)

        response = self.client.get(reverse("booking-list"), {"search": "zawadi"})
        self.assertEqual(response.data["count"], 1)

        response = self.client.get(reverse("booking-list"), {"search": "msasani", "status": "pending"})
        self.assertEqual(response.data["count"], 1)
        self.assertEqual(response.data["results"][0]["tenant_name"], "Amina Juma")

    def test_approve_then_complete(self) -> None:
        booking = self.create_request()
        self.client.force_authenticate(self.admin)

        scheduled = timezone.now() - timedelta(hours=1)
        response = self.client.post(
            reverse("booking-approve", args=[booking.id]),
            {"scheduled_date": scheduled.isoformat(), "admin_response": "Meet at the gate"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "approved")
        self.assertIsNotNone(response.data["responded_at"])
        self.assertEqual(EmployeePerformance.objects.get(admin=self.admin).bookings_approved, 1)

        response = self.client.post(reverse("booking-complete", args=[booking.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "completed")

        self.property.refresh_from_db()
        self.assertEqual(self.property.bookings_count, 1)
        self.assertFalse(self.property.is_available)
        self.assertEqual(EmployeePerformance.objects.get(admin=self.admin).bookings_completed, 1)

    def test_approve_without_schedule(self) -> None:
        booking = self.create_request()
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("booking-approve", args=[booking.id]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("scheduled_date", response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, BookingRequest.Status.PENDING)

    def test_cannot_complete_before_viewing(self) -> None:
        booking = self.create_request(
            status=BookingRequest.Status.APPROVED,
            scheduled_date=timezone.now() + timedelta(days=1),
        )
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("booking-complete", args=[booking.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_tenant_cannot_approve(self) -> None:
        booking = self.create_request()
        self.client.force_authenticate(self.tenant)
        response = self.client.post(
            reverse("booking-approve", args=[booking.id]),
            {"scheduled_date": timezone.now().isoformat()},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["detail"], "Unauthorized.")

    def test_other_admin_does_not_see_request(self) -> None:
        booking = self.create_request()
        self.client.force_authenticate(self.other_admin)
        response = self.client.post(
            reverse("booking-decline", args=[booking.id]),
            {"admin_response": "No"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_decline_requires_reason(self) -> None:
        booking = self.create_request()
        self.client.force_authenticate(self.admin)
        response = self.client.post(reverse("booking-decline", args=[booking.id]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("admin_response", response.data)

        response = self.client.post(
            reverse("booking-decline", args=[booking.id]),
            {"admin_response": "Already let"},
            format="json",
        )
        self.assertEqual(response.data["status"], "declined")

        response = self.client.post(reverse("booking-cancel", args=[booking.id]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_tenant_cancels_and_leaves_no_feedback(self) -> None:
        booking = self.create_request()
        self.client.force_authenticate(self.tenant)
        response = self.client.post(reverse("booking-cancel", args=[booking.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["status"], "cancelled")

        response = self.client.post(reverse("booking-feedback", args=[booking.id]), {"rating": 5}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_feedback_on_completed_request(self) -> None:
        booking = self.create_request(
            status=BookingRequest.Status.COMPLETED,
            scheduled_date=timezone.now() - timedelta(days=1),
        )
        self.client.force_authenticate(self.tenant)
        response = self.client.post(
            reverse("booking-feedback", args=[booking.id]),
            {"rating": 4, "comment": "Very helpful"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["feedback_rating"], 4)

        response = self.client.post(reverse("booking-feedback", args=[booking.id]), {"rating": 7}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cancellation_notice_goes_to_the_other_party(self) -> None:
        booking = self.create_request(status=BookingRequest.Status.CANCELLED)
        cancelled = BookingRequest.Status.CANCELLED.value

        self.assertEqual(notify_status_changed(booking.id, cancelled, self.tenant.id), "agent@example.com")
        self.assertEqual(notify_status_changed(booking.id, cancelled, self.admin.id), "amina@example.com")
        self.assertEqual(
            notify_status_changed(booking.id, BookingRequest.Status.APPROVED.value, self.admin.id),
            "amina@example.com",
        )
