"""Booking request models for NyumbaLink."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain import entities
from .domain.lifecycle import BookingStatus


class BookingRequestQuerySet(models.QuerySet):
    def visible_to(self, user):
        """Rows a user may see: everything, their assigned requests, or their own."""
        if not user.is_authenticated:
            return self.none()
        if hasattr(user, "is_super_admin") and user.is_super_admin():
            return self
        if hasattr(user, "is_property_admin") and user.is_property_admin():
            return self.filter(admin=user)
        return self.filter(tenant=user)


class BookingRequest(models.Model):
    """A tenant's request to view a property. Rows are never deleted."""

    class Status(models.TextChoices):
        PENDING = BookingStatus.PENDING.value, _("Pending")
        APPROVED = BookingStatus.APPROVED.value, _("Approved")
        DECLINED = BookingStatus.DECLINED.value, _("Declined")
        COMPLETED = BookingStatus.COMPLETED.value, _("Completed")
        CANCELLED = BookingStatus.CANCELLED.value, _("Cancelled")

    property = models.ForeignKey(
        "properties.Property",
        on_delete=models.PROTECT,
        related_name="booking_requests",
    )
    tenant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="booking_requests",
    )
    admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="handled_booking_requests",
        help_text=_("Property admin at the time the request was made."),
    )

    tenant_name = models.CharField(max_length=255)
    tenant_phone = models.CharField(max_length=20)
    tenant_email = models.EmailField()
    preferred_viewing_date = models.DateField()
    preferred_viewing_time = models.TimeField()
    message = models.TextField(blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    admin_response = models.TextField(blank=True)
    scheduled_date = models.DateTimeField(null=True, blank=True)
    responded_at = models.DateTimeField(null=True, blank=True)

    feedback_rating = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    feedback_comment = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BookingRequestQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking request")
        verbose_name_plural = _("Booking requests")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(feedback_rating__isnull=True)
                | models.Q(feedback_rating__gte=1, feedback_rating__lte=5),
                name="booking_feedback_rating_range",
            ),
        ]
        indexes = [
            models.Index(fields=["admin", "status"], name="booking_admin_status_idx"),
            models.Index(fields=["tenant", "-created_at"], name="booking_tenant_created_idx"),
            models.Index(fields=["status", "-created_at"], name="booking_status_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.tenant_name} → {self.property_id} ({self.status})"

    def to_domain(self) -> entities.BookingRequest:
        return entities.BookingRequest(
            id=self.pk,
            property_id=self.property_id,
            tenant_id=self.tenant_id,
            admin_id=self.admin_id,
            preferred_viewing_date=self.preferred_viewing_date,
            preferred_viewing_time=self.preferred_viewing_time,
            status=BookingStatus(self.status),
            admin_response=self.admin_response,
            scheduled_date=self.scheduled_date,
            responded_at=self.responded_at,
            feedback_rating=self.feedback_rating,
            feedback_comment=self.feedback_comment,
        )

    def apply_state(self, state: entities.BookingRequest) -> None:
        """Copy the mutable part of a domain aggregate back onto the row and save it."""
        self.status = state.status.value
        self.admin_response = state.admin_response
        self.scheduled_date = state.scheduled_date
        self.responded_at = state.responded_at
        self.feedback_rating = state.feedback_rating
        self.feedback_comment = state.feedback_comment
        self.save(
            update_fields=[
                "status",
                "admin_response",
                "scheduled_date",
                "responded_at",
                "feedback_rating",
                "feedback_comment",
                "updated_at",
            ]
        )
