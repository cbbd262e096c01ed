"""Application services for the booking request workflow.

Every status change loads the row under a lock, lets the domain aggregate
decide whether the change is allowed, then writes the new state and the
counters in the same transaction. Domain events go out after commit.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from django.utils import timezone  # type: ignore

from apps.analytics import services as analytics_services
from apps.properties import services as property_services
from apps.properties.models import Property
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ValidationFailed
from shared.domain.session import Role, Session

from .domain import entities
from .domain.events import BookingRequested
from .domain.validation import normalize_phone, validate_booking_request
from .models import BookingRequest

logger = logging.getLogger(__name__)


def create_booking_request(session: Session, property_obj: Property, data: dict[str, Any]) -> BookingRequest:
    """Record a tenant's viewing request for an available property.

    Nothing is written when validation fails.
    """
    session.require(Role.TENANT)

    errors = validate_booking_request(data, today=timezone.localdate())
    if errors:
        raise ValidationFailed(errors)
    if not property_obj.is_available:
        raise ValidationFailed({"property": "This property is no longer available for viewings."})

    with DjangoUnitOfWork() as uow:
        booking = BookingRequest.objects.create(
            property=property_obj,
            tenant_id=session.user_id,
            admin_id=property_obj.assigned_admin_id,
            tenant_name=data["tenant_name"].strip(),
            tenant_phone=normalize_phone(data["tenant_phone"]),
            tenant_email=data["tenant_email"].strip(),
            preferred_viewing_date=data["preferred_viewing_date"],
            preferred_viewing_time=data["preferred_viewing_time"],
            message=data.get("message") or "",
        )
        property_services.record_inquiry(property_obj.pk)
        analytics_services.record_booking_received(booking.admin_id)

        state = booking.to_domain()
        state.add_event(BookingRequested(
            aggregate_id=booking.pk,
            booking_id=booking.pk,
            property_id=booking.property_id,
            tenant_id=booking.tenant_id,
            admin_id=booking.admin_id,
        ))
        uow.collect_events(state)

    logger.info(f"Booking request {booking.pk} created for property {property_obj.pk} by tenant {session.user_id}")
    return booking


def _change(
    session: Session,
    booking_id: int,
    mutate: Callable[[entities.BookingRequest], None],
    after: Optional[Callable[[BookingRequest], None]] = None,
) -> BookingRequest:
    with DjangoUnitOfWork() as uow:
        try:
            booking = BookingRequest.objects.select_for_update().get(pk=booking_id)
        except BookingRequest.DoesNotExist:
            raise ValidationFailed({"booking": "Booking request not found."})

        state = booking.to_domain()
        previous = state.status
        mutate(state)
        booking.apply_state(state)
        if after is not None:
            after(booking)
        uow.collect_events(state)

    logger.info(
        f"Booking request {booking.pk} moved {previous.value} -> {booking.status} by user {session.user_id}"
    )
    return booking


def approve_booking(
    session: Session,
    booking_id: int,
    *,
    scheduled_date: Optional[datetime],
    admin_response: str = "",
) -> BookingRequest:
    now = timezone.now()
    return _change(
        session,
        booking_id,
        lambda state: state.approve(session, scheduled_date=scheduled_date, now=now, admin_response=admin_response),
        lambda booking: analytics_services.record_booking_approved(booking.admin_id),
    )


def decline_booking(session: Session, booking_id: int, *, admin_response: str) -> BookingRequest:
    now = timezone.now()
    return _change(
        session,
        booking_id,
        lambda state: state.decline(session, admin_response=admin_response, now=now),
    )


def complete_booking(session: Session, booking_id: int) -> BookingRequest:
    now = timezone.now()

    def after(booking: BookingRequest) -> None:
        property_services.record_completed_booking(booking.property_id)
        analytics_services.record_booking_completed(booking.admin_id)

    return _change(session, booking_id, lambda state: state.complete(session, now=now), after)


def cancel_booking(session: Session, booking_id: int, *, reason: str = "") -> BookingRequest:
    now = timezone.now()
    return _change(
        session,
        booking_id,
        lambda state: state.cancel(session, now=now, reason=reason),
    )


def leave_feedback(session: Session, booking_id: int, *, rating: Any, comment: str = "") -> BookingRequest:
    """Rate a completed viewing; a second call replaces the earlier feedback."""
    with DjangoUnitOfWork() as uow:
        try:
            booking = BookingRequest.objects.select_for_update().get(pk=booking_id)
        except BookingRequest.DoesNotExist:
            raise ValidationFailed({"booking": "Booking request not found."})
        state = booking.to_domain()
        state.leave_feedback(session, rating=rating, comment=comment)
        booking.apply_state(state)
        uow.collect_events(state)

    logger.info(f"Feedback {rating} left on booking request {booking.pk}")
    return booking
