"""
Booking Domain Entities

- BookingRequest: aggregate root for one viewing request
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from shared.domain.base import Aggregate
from shared.domain.exceptions import AuthorizationError, ValidationFailed
from shared.domain.session import Session

from .events import BookingStatusChanged, FeedbackLeft
from .lifecycle import BookingStatus, check_transition
from .validation import validate_feedback


@dataclass(eq=False)
class BookingRequest(Aggregate):
    """
    Booking Request Aggregate Root

    A tenant's request to view a property, handled by the admin the
    property is assigned to.

    Key invariants:
    - status always follows the lifecycle in `lifecycle.TRANSITIONS`
    - only the request's tenant, its admin or a super admin act on it
    - feedback only on completed requests, by the tenant, rated 1-5
    """

    property_id: Optional[int] = None
    tenant_id: Optional[int] = None
    admin_id: Optional[int] = None

    preferred_viewing_date: Optional[date] = None
    preferred_viewing_time: Optional[time] = None

    status: BookingStatus = BookingStatus.PENDING
    admin_response: str = ''
    scheduled_date: Optional[datetime] = None
    responded_at: Optional[datetime] = None

    feedback_rating: Optional[int] = None
    feedback_comment: str = ''

    def __post_init__(self):
        self.status = BookingStatus(self.status)

    # --- Authorization -----------------------------------------------------

    def is_stakeholder(self, session: Session) -> bool:
        if session.is_super_admin:
            return True
        if session.is_property_admin:
            return self.admin_id == session.user_id
        return self.tenant_id == session.user_id

    def _ensure_stakeholder(self, session: Session):
        if not self.is_stakeholder(session):
            raise AuthorizationError()

    # --- Transitions -------------------------------------------------------

    def _move_to(self, target: BookingStatus, session: Session, now: datetime, **side_fields):
        check_transition(self.status, target, session, now=now, **side_fields)
        self._ensure_stakeholder(session)

        previous = self.status
        self.status = target
        self.add_event(BookingStatusChanged(
            aggregate_id=self.id,
            booking_id=self.id,
            previous_status=previous.value,
            new_status=target.value,
            changed_by=session.user_id,
        ))

    def approve(self, session: Session, *, scheduled_date: Optional[datetime], now: datetime,
                admin_response: str = ''):
        """pending -> approved"""
        self._move_to(BookingStatus.APPROVED, session, now, scheduled_date=scheduled_date)
        self.scheduled_date = scheduled_date
        self.admin_response = admin_response or ''
        if self.responded_at is None:
            self.responded_at = now

    def decline(self, session: Session, *, admin_response: str, now: datetime):
        """pending -> declined"""
        self._move_to(BookingStatus.DECLINED, session, now, admin_response=admin_response)
        self.admin_response = admin_response.strip()
        if self.responded_at is None:
            self.responded_at = now

    def complete(self, session: Session, *, now: datetime):
        """approved -> completed, once the scheduled viewing is over"""
        self._move_to(BookingStatus.COMPLETED, session, now, scheduled_date=self.scheduled_date)

    def cancel(self, session: Session, *, now: datetime, reason: str = ''):
        """pending/approved -> cancelled"""
        self._move_to(BookingStatus.CANCELLED, session, now)
        if reason and session.is_admin:
            self.admin_response = reason.strip()
        if session.is_admin and self.responded_at is None:
            self.responded_at = now

    # --- Feedback ----------------------------------------------------------

    def leave_feedback(self, session: Session, *, rating: int, comment: str = ''):
        if not session.is_tenant or self.tenant_id != session.user_id:
            raise AuthorizationError()
        if self.status != BookingStatus.COMPLETED:
            raise ValidationFailed({'status': 'Feedback can only be left after the viewing is completed.'})
        errors = validate_feedback(rating)
        if errors:
            raise ValidationFailed(errors)

        self.feedback_rating = rating
        self.feedback_comment = comment or ''
        self.add_event(FeedbackLeft(
            aggregate_id=self.id,
            booking_id=self.id,
            admin_id=self.admin_id,
            rating=rating,
        ))
