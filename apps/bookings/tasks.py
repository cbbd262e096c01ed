"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging
from typing import Optional

from celery import shared_task  # type: ignore

from .models import BookingRequest

logger = logging.getLogger(__name__)


@shared_task(name="bookings.notify_booking_requested")
def notify_booking_requested(booking_id: int) -> None:
    """Tell the assigned admin a new viewing request is waiting."""
    booking = BookingRequest.objects.select_related("admin", "property").filter(pk=booking_id).first()
    if booking is None:
        logger.warning(f"Booking request {booking_id} vanished before notification")
        return
    if booking.admin is None:
        logger.warning(f"Booking request {booking_id} has no admin to notify")
        return
    # Delivery channel (SMS/email) is not wired yet; the log line is the notification
    logger.info(
        f"Notify admin {booking.admin.email}: new viewing request {booking.pk} for '{booking.property.title}'"
    )


@shared_task(name="bookings.notify_status_changed")
def notify_status_changed(booking_id: int, new_status: str, changed_by: Optional[int] = None) -> Optional[str]:
    """Tell the tenant about a status change, or the admin when the tenant cancelled.

    Returns the address notified.
    """
    booking = BookingRequest.objects.select_related("tenant", "admin").filter(pk=booking_id).first()
    if booking is None:
        logger.warning(f"Booking request {booking_id} vanished before notification")
        return None
    cancelled_by_tenant = (
        new_status == BookingRequest.Status.CANCELLED
        and changed_by is not None
        and changed_by == booking.tenant_id
    )
    if cancelled_by_tenant and booking.admin is not None:
        recipient = booking.admin.email
    else:
        recipient = booking.tenant_email
    logger.info(f"Notify {recipient}: booking request {booking.pk} is now {new_status}")
    return recipient
