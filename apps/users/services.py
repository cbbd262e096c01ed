"""Employee management services.

Only super admins hire, activate, deactivate employees and assign properties
to them. Every function takes the acting `Session` and checks the role before
touching the database.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from django.db import IntegrityError, transaction  # type: ignore

from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import ValidationFailed
from shared.domain.session import Role, Session

from .models import CustomUser

logger = logging.getLogger(__name__)


@transaction.atomic
def invite_employee(session: Session, *, email: str, full_name: str, phone: str | None = None) -> CustomUser:
    """Create an inactive property admin account awaiting activation.

    The account gets an unusable password; credentials are issued by the
    external identity provider that sends the invitation.
    """
    session.require(Role.SUPER_ADMIN)

    email = CustomUser.objects.normalize_email(email)
    if CustomUser.objects.filter(email__iexact=email).exists():
        raise ValidationFailed({"email": "A user with this email already exists."})

    employee = CustomUser.objects.create_user(
        email=email,
        password=None,
        full_name=full_name,
        phone=phone or None,
        role=CustomUser.RoleChoices.PROPERTY_ADMIN,
        is_active=False,
    )
    logger.info(f"Employee {employee.email} invited by user {session.user_id}")
    return employee


def activate_employee(session: Session, employee: CustomUser, *, employee_id: str, hired_date: date) -> CustomUser:
    """Turn a user into an active property admin with an employee number."""
    session.require(Role.SUPER_ADMIN)

    if not employee_id:
        raise ValidationFailed({"employee_id": "Employee ID is required."})
    clash = CustomUser.objects.filter(employee_id=employee_id).exclude(pk=employee.pk)
    if clash.exists():
        raise ValidationFailed({"employee_id": "This employee ID is already taken."})

    employee.employee_id = employee_id
    employee.hired_date = hired_date
    employee.is_active = True
    employee.role = CustomUser.RoleChoices.PROPERTY_ADMIN
    try:
        with transaction.atomic():
            employee.save(update_fields=["employee_id", "hired_date", "is_active", "role", "updated_at"])
    except IntegrityError:
        raise ValidationFailed({"employee_id": "This employee ID is already taken."})

    logger.info(f"Employee {employee.email} activated as {employee_id} by user {session.user_id}")
    return employee


def deactivate_employee(session: Session, employee: CustomUser) -> CustomUser:
    """Block the employee's access while keeping their history."""
    session.require(Role.SUPER_ADMIN)

    if employee.pk == session.user_id:
        raise ValidationFailed({"non_field_errors": "You cannot deactivate your own account."})

    employee.is_active = False
    employee.save(update_fields=["is_active", "updated_at"])
    logger.info(f"Employee {employee.email} deactivated by user {session.user_id}")
    return employee


def assign_properties(session: Session, admin: CustomUser, property_ids: Iterable[int]) -> int:
    """Assign every listed property to `admin` in one transaction.

    Either all properties are reassigned or none is: unknown ids are
    rejected before any write, and a failure mid-way rolls back the batch.
    Returns the number of properties assigned.
    """
    from apps.properties.models import Property

    session.require(Role.SUPER_ADMIN)

    if not admin.is_property_admin():
        raise ValidationFailed({"admin": "Properties can only be assigned to property admins."})

    ids = list(dict.fromkeys(int(pk) for pk in property_ids))
    if not ids:
        raise ValidationFailed({"property_ids": "Select at least one property."})

    with DjangoUnitOfWork():
        found = set(
            Property.objects.select_for_update().filter(pk__in=ids).values_list("pk", flat=True)
        )
        missing = [pk for pk in ids if pk not in found]
        if missing:
            raise ValidationFailed(
                {"property_ids": f"Unknown property ids: {', '.join(str(pk) for pk in missing)}."}
            )
        for property_obj in Property.objects.filter(pk__in=ids):
            property_obj.assigned_admin = admin
            property_obj.save(update_fields=["assigned_admin", "updated_at"])

    logger.info(f"Assigned {len(ids)} properties to admin {admin.pk} by user {session.user_id}")
    return len(ids)
