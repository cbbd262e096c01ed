"""Tests for booking request status transitions."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from apps.bookings.domain.entities import BookingRequest
from apps.bookings.domain.events import BookingStatusChanged, FeedbackLeft
from apps.bookings.domain.lifecycle import (
    BookingStatus,
    allowed_targets,
    check_transition,
    is_terminal,
    required_fields,
)
from shared.domain.exceptions import AuthorizationError, ValidationFailed
from shared.domain.session import Role, Session

NOW = datetime(2026, 5, 10, 12, 0)

SUPER_ADMIN = Session(user_id=1, role=Role.SUPER_ADMIN)
ADMIN = Session(user_id=2, role=Role.PROPERTY_ADMIN)
OTHER_ADMIN = Session(user_id=3, role=Role.PROPERTY_ADMIN)
TENANT = Session(user_id=10, role=Role.TENANT)
OTHER_TENANT = Session(user_id=11, role=Role.TENANT)


def make_request(status=BookingStatus.PENDING, **kwargs) -> BookingRequest:
    return BookingRequest(id=7, property_id=5, tenant_id=10, admin_id=2, status=status, **kwargs)


def test_terminal_statuses() -> None:
    assert is_terminal(BookingStatus.DECLINED)
    assert is_terminal(BookingStatus.COMPLETED)
    assert is_terminal(BookingStatus.CANCELLED)
    assert not is_terminal(BookingStatus.PENDING)
    assert allowed_targets(BookingStatus.COMPLETED) == ()


def test_required_fields() -> None:
    assert required_fields(BookingStatus.PENDING, BookingStatus.APPROVED) == ("scheduled_date",)
    assert required_fields(BookingStatus.PENDING, BookingStatus.DECLINED) == ("admin_response",)
    with pytest.raises(ValidationFailed):
        required_fields(BookingStatus.DECLINED, BookingStatus.PENDING)


def test_tenant_cannot_approve() -> None:
    with pytest.raises(AuthorizationError) as exc:
        check_transition(BookingStatus.PENDING, BookingStatus.APPROVED, TENANT, scheduled_date=NOW)
    assert exc.value.message == "Unauthorized."


def test_approve_requires_scheduled_date() -> None:
    with pytest.raises(ValidationFailed) as exc:
        check_transition(BookingStatus.PENDING, BookingStatus.APPROVED, ADMIN)
    assert "scheduled_date" in exc.value.errors


def test_nothing_leaves_a_terminal_status() -> None:
    for status in (BookingStatus.DECLINED, BookingStatus.COMPLETED, BookingStatus.CANCELLED):
        with pytest.raises(ValidationFailed):
            check_transition(status, BookingStatus.PENDING, SUPER_ADMIN)


def test_approve_sets_schedule_and_emits_event() -> None:
    request = make_request()
    when = NOW + timedelta(days=2)
    request.approve(ADMIN, scheduled_date=when, now=NOW, admin_response="See you there")

    assert request.status == BookingStatus.APPROVED
    assert request.scheduled_date == when
    assert request.responded_at == NOW
    events = request.events
    assert len(events) == 1
    assert isinstance(events[0], BookingStatusChanged)
    assert events[0].previous_status == "pending"
    assert events[0].new_status == "approved"


def test_admin_of_another_property_is_rejected() -> None:
    request = make_request()
    with pytest.raises(AuthorizationError):
        request.approve(OTHER_ADMIN, scheduled_date=NOW, now=NOW)
    assert request.status == BookingStatus.PENDING


def test_decline_requires_a_reason() -> None:
    request = make_request()
    with pytest.raises(ValidationFailed) as exc:
        request.decline(ADMIN, admin_response="  ", now=NOW)
    assert "admin_response" in exc.value.errors

    request.decline(ADMIN, admin_response="Already let", now=NOW)
    assert request.status == BookingStatus.DECLINED
    assert request.admin_response == "Already let"


def test_complete_only_after_the_viewing() -> None:
    request = make_request(BookingStatus.APPROVED, scheduled_date=NOW + timedelta(hours=1))
    with pytest.raises(ValidationFailed):
        request.complete(ADMIN, now=NOW)

    request.complete(ADMIN, now=NOW + timedelta(hours=2))
    assert request.status == BookingStatus.COMPLETED


def test_tenant_cancels_own_request() -> None:
    request = make_request()
    request.cancel(TENANT, now=NOW)
    assert request.status == BookingStatus.CANCELLED
    assert request.responded_at is None


def test_tenant_cannot_cancel_someone_elses_request() -> None:
    with pytest.raises(AuthorizationError):
        make_request().cancel(OTHER_TENANT, now=NOW)


def test_super_admin_acts_on_any_request() -> None:
    request = make_request(BookingStatus.APPROVED, scheduled_date=NOW)
    request.cancel(SUPER_ADMIN, now=NOW, reason="Owner withdrew the listing")
    assert request.status == BookingStatus.CANCELLED
    assert request.admin_response == "Owner withdrew the listing"


def test_feedback_after_completion() -> None:
    request = make_request(BookingStatus.COMPLETED, scheduled_date=NOW)
    request.leave_feedback(TENANT, rating=4, comment="Helpful agent")

    assert request.feedback_rating == 4
    assert isinstance(request.events[-1], FeedbackLeft)
    assert request.events[-1].admin_id == 2


def test_feedback_rules() -> None:
    with pytest.raises(ValidationFailed):
        make_request(BookingStatus.APPROVED).leave_feedback(TENANT, rating=4)
    with pytest.raises(ValidationFailed):
        make_request(BookingStatus.COMPLETED).leave_feedback(TENANT, rating=6)
    with pytest.raises(AuthorizationError):
        make_request(BookingStatus.COMPLETED).leave_feedback(ADMIN, rating=5)
