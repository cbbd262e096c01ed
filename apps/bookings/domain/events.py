"""
Booking Domain Events

Events that represent things that have happened to a booking request.
They are published after the transaction that produced them commits.
"""

from dataclasses import dataclass
from typing import Optional

from shared.domain.base import DomainEvent


@dataclass
class BookingRequested(DomainEvent):
    """
    Event: A tenant submitted a viewing request

    Triggers:
    - Notify the assigned property admin
    """
    booking_id: Optional[int] = None
    property_id: Optional[int] = None
    tenant_id: Optional[int] = None
    admin_id: Optional[int] = None


@dataclass
class BookingStatusChanged(DomainEvent):
    """
    Event: A booking request moved to a new status

    Triggers:
    - Notify the tenant (approved, declined, completed)
    - Notify the admin (cancelled by tenant)
    """
    booking_id: Optional[int] = None
    previous_status: str = ''
    new_status: str = ''
    changed_by: Optional[int] = None


@dataclass
class FeedbackLeft(DomainEvent):
    """
    Event: Tenant rated a completed viewing

    Triggers:
    - Refresh the admin's satisfaction KPI
    """
    booking_id: Optional[int] = None
    admin_id: Optional[int] = None
    rating: int = 0
