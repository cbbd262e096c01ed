"""
Booking Request Lifecycle

Status finite state machine for viewing requests:

    pending -> approved   (admin; needs scheduled_date)
    pending -> declined   (admin; needs admin_response)
    approved -> completed (admin; only once scheduled_date has passed)
    pending/approved -> cancelled (tenant who made the request, or admin)

declined, completed and cancelled are terminal: nothing leaves them.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Optional, Tuple

from shared.domain.exceptions import AuthorizationError, ValidationFailed
from shared.domain.session import Role, Session


class BookingStatus(str, Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    DECLINED = 'declined'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


TERMINAL_STATUSES = frozenset({
    BookingStatus.DECLINED,
    BookingStatus.COMPLETED,
    BookingStatus.CANCELLED,
})

ADMIN_ROLES = frozenset({Role.SUPER_ADMIN, Role.PROPERTY_ADMIN})
ANY_STAKEHOLDER = ADMIN_ROLES | {Role.TENANT}


@dataclass(frozen=True)
class TransitionRule:
    """Who may perform a transition and which side-fields it needs."""
    roles: FrozenSet[Role]
    required: Tuple[str, ...] = ()


TRANSITIONS: Dict[Tuple[BookingStatus, BookingStatus], TransitionRule] = {
    (BookingStatus.PENDING, BookingStatus.APPROVED): TransitionRule(ADMIN_ROLES, ('scheduled_date',)),
    (BookingStatus.PENDING, BookingStatus.DECLINED): TransitionRule(ADMIN_ROLES, ('admin_response',)),
    (BookingStatus.APPROVED, BookingStatus.COMPLETED): TransitionRule(ADMIN_ROLES),
    (BookingStatus.PENDING, BookingStatus.CANCELLED): TransitionRule(ANY_STAKEHOLDER),
    (BookingStatus.APPROVED, BookingStatus.CANCELLED): TransitionRule(ANY_STAKEHOLDER),
}

_REQUIRED_MESSAGES = {
    'scheduled_date': 'A scheduled date is required to approve a booking request.',
    'admin_response': 'Please explain why the booking request is declined.',
}


def is_terminal(status: BookingStatus) -> bool:
    return BookingStatus(status) in TERMINAL_STATUSES


def allowed_targets(current: BookingStatus) -> Tuple[BookingStatus, ...]:
    current = BookingStatus(current)
    return tuple(target for (source, target) in TRANSITIONS if source == current)


def required_fields(current: BookingStatus, target: BookingStatus) -> Tuple[str, ...]:
    """Side-fields the transition needs; raises ValidationFailed if it is not allowed."""
    return _rule_for(BookingStatus(current), BookingStatus(target)).required


def _rule_for(current: BookingStatus, target: BookingStatus) -> TransitionRule:
    rule = TRANSITIONS.get((current, target))
    if rule is not None:
        return rule
    if current in TERMINAL_STATUSES:
        message = f"A {current.value} booking request can no longer change status."
    else:
        message = f"Cannot move a booking request from {current.value} to {target.value}."
    raise ValidationFailed({'status': message})


def check_transition(
    current: BookingStatus,
    target: BookingStatus,
    session: Session,
    *,
    scheduled_date: Optional[datetime] = None,
    admin_response: str = '',
    now: Optional[datetime] = None,
) -> None:
    """
    Validate one status change for the acting session.

    The role check runs first so an unauthorized caller learns nothing
    about the request. Ownership (is this the tenant's own request, the
    admin's assigned request) is checked by the caller, which knows the row.

    Raises:
        AuthorizationError: the session's role may not perform the transition
        ValidationFailed: transition not allowed, or a required side-field is
            missing; errors are keyed by field
    """
    current = BookingStatus(current)
    target = BookingStatus(target)

    rule = TRANSITIONS.get((current, target))
    if rule is not None and session.role not in rule.roles:
        raise AuthorizationError()
    rule = _rule_for(current, target)

    values = {
        'scheduled_date': scheduled_date,
        'admin_response': (admin_response or '').strip(),
    }
    errors = {
        name: _REQUIRED_MESSAGES[name]
        for name in rule.required
        if not values[name]
    }
    if errors:
        raise ValidationFailed(errors)

    if target == BookingStatus.COMPLETED:
        if scheduled_date is None:
            raise ValidationFailed({'scheduled_date': 'This booking request has no scheduled viewing.'})
        if now is not None and scheduled_date > now:
            raise ValidationFailed(
                {'status': 'A booking request can only be completed after its scheduled viewing.'}
            )
