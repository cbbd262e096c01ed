"""
Booking Request Validation

Checks a tenant's viewing request before anything is persisted. Returns a
field-keyed error map; an empty map means the request is valid.
"""

import re
from datetime import date, datetime, time
from typing import Any, Dict, Mapping, Optional

from .lifecycle import BookingStatus

TANZANIAN_MOBILE = re.compile(r'^(\+255|0)[67]\d{8}$')
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

# On the hour from 09:00 to 17:00, lunch hour excluded
VIEWING_TIME_SLOTS = (
    time(9, 0),
    time(10, 0),
    time(11, 0),
    time(12, 0),
    time(14, 0),
    time(15, 0),
    time(16, 0),
    time(17, 0),
)

MESSAGES = {
    'tenant_name': 'Full name is required',
    'tenant_phone_required': 'Phone number is required',
    'tenant_phone': 'Please enter a valid Tanzanian phone number',
    'tenant_email_required': 'Email address is required',
    'tenant_email': 'Please enter a valid email address',
    'preferred_viewing_date': 'Please select a viewing date',
    'preferred_viewing_date_past': 'Viewing date must be after today',
    'preferred_viewing_time': 'Please select a viewing time',
    'status': 'New booking requests must start as pending',
}


def normalize_phone(phone: str) -> str:
    """Drop every whitespace character, as typed numbers often contain spaces."""
    return re.sub(r'\s+', '', phone or '')


def is_valid_phone(phone: str) -> bool:
    return bool(TANZANIAN_MOBILE.match(normalize_phone(phone)))


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email or ''))


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def _as_time(value: Any) -> Optional[time]:
    if isinstance(value, time):
        return value
    if isinstance(value, str) and value:
        try:
            return time.fromisoformat(value)
        except ValueError:
            return None
    return None


def validate_booking_request(data: Mapping[str, Any], today: date) -> Dict[str, str]:
    """
    Validate the fields of a new viewing request.

    `today` is passed in so the "strictly after today" rule does not depend
    on the clock of whoever runs the check.
    """
    errors: Dict[str, str] = {}

    if not str(data.get('tenant_name') or '').strip():
        errors['tenant_name'] = MESSAGES['tenant_name']

    phone = str(data.get('tenant_phone') or '')
    if not phone.strip():
        errors['tenant_phone'] = MESSAGES['tenant_phone_required']
    elif not is_valid_phone(phone):
        errors['tenant_phone'] = MESSAGES['tenant_phone']

    email = str(data.get('tenant_email') or '')
    if not email.strip():
        errors['tenant_email'] = MESSAGES['tenant_email_required']
    elif not is_valid_email(email):
        errors['tenant_email'] = MESSAGES['tenant_email']

    viewing_date = _as_date(data.get('preferred_viewing_date'))
    if viewing_date is None:
        errors['preferred_viewing_date'] = MESSAGES['preferred_viewing_date']
    elif viewing_date <= today:
        errors['preferred_viewing_date'] = MESSAGES['preferred_viewing_date_past']

    viewing_time = _as_time(data.get('preferred_viewing_time'))
    if viewing_time is None or viewing_time not in VIEWING_TIME_SLOTS:
        errors['preferred_viewing_time'] = MESSAGES['preferred_viewing_time']

    status = data.get('status')
    if status not in (None, '') and status != BookingStatus.PENDING.value:
        errors['status'] = MESSAGES['status']

    return errors


def validate_feedback(rating: Any) -> Dict[str, str]:
    """Feedback ratings are whole numbers from 1 to 5."""
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        return {'feedback_rating': 'Rating must be a whole number between 1 and 5'}
    return {}
