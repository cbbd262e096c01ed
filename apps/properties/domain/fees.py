"""
Service Fee Calculation

The platform earns a fixed commission on top of the monthly rent:

    service_fee_amount = rent_amount * 0.2
    total_amount = rent_amount + service_fee_amount

`Property.save()` runs this on every create and update so the stored fee
and total never drift from the rent.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from shared.domain.base import ValueObject

SERVICE_FEE_RATE = Decimal('0.20')

Number = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class PropertyFees(ValueObject):
    """Rent with its derived service fee and tenant-facing total."""
    rent_amount: Decimal
    service_fee_amount: Decimal
    total_amount: Decimal


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Go through str so 0.1 stays 0.1 instead of its binary expansion
        return Decimal(str(value))
    return Decimal(value)


def calculate_fees(rent_amount: Number) -> PropertyFees:
    """
    Derive service fee and total from the monthly rent.

    No rounding happens here; callers storing the result in a
    two-decimal column get the database's rounding.

    Raises:
        ValueError: rent is negative or not a number
    """
    try:
        rent = _to_decimal(rent_amount)
    except (ArithmeticError, ValueError, TypeError):
        raise ValueError(f"Rent amount must be a number, got {rent_amount!r}")

    if not rent.is_finite():
        raise ValueError(f"Rent amount must be a finite number, got {rent_amount!r}")
    if rent < 0:
        raise ValueError("Rent amount cannot be negative")

    service_fee = rent * SERVICE_FEE_RATE
    return PropertyFees(
        rent_amount=rent,
        service_fee_amount=service_fee,
        total_amount=rent + service_fee,
    )
