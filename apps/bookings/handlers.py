"""Domain event handlers for booking requests.

Handlers run after the transaction that raised the event commits. They only
queue Celery tasks so a slow delivery channel never holds up a request.
"""

from __future__ import annotations

import logging

from shared.application.message_bus import MessageBus

from .domain.events import BookingRequested, BookingStatusChanged, FeedbackLeft

logger = logging.getLogger(__name__)


def on_booking_requested(event: BookingRequested) -> None:
    from .tasks import notify_booking_requested

    notify_booking_requested.delay(event.booking_id)


def on_status_changed(event: BookingStatusChanged) -> None:
    from .tasks import notify_status_changed

    notify_status_changed.delay(event.booking_id, event.new_status, event.changed_by)


def on_feedback_left(event: FeedbackLeft) -> None:
    logger.info(f"Admin {event.admin_id} rated {event.rating} on booking request {event.booking_id}")


def register(bus: MessageBus) -> None:
    bus.register_event_handler(BookingRequested, on_booking_requested)
    bus.register_event_handler(BookingStatusChanged, on_status_changed)
    bus.register_event_handler(FeedbackLeft, on_feedback_left)
