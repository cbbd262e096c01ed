"""Tests for the service fee helper."""

from __future__ import annotations

from decimal import Decimal

import pytest

from apps.properties.domain.fees import SERVICE_FEE_RATE, calculate_fees


def test_fee_is_twenty_percent_of_rent() -> None:
    fees = calculate_fees(Decimal("800000"))
    assert fees.service_fee_amount == Decimal("160000")
    assert fees.total_amount == Decimal("960000")
    assert SERVICE_FEE_RATE == Decimal("0.20")


def test_zero_rent_has_zero_fee() -> None:
    fees = calculate_fees(0)
    assert fees.service_fee_amount == 0
    assert fees.total_amount == 0


def test_fractional_rent_is_not_rounded() -> None:
    fees = calculate_fees(Decimal("100.05"))
    assert fees.service_fee_amount == Decimal("20.0100")
    assert fees.total_amount == Decimal("120.0600")


def test_float_rent_keeps_its_decimal_value() -> None:
    fees = calculate_fees(0.1)
    assert fees.rent_amount == Decimal("0.1")
    assert fees.service_fee_amount == Decimal("0.02")


@pytest.mark.parametrize("rent", [Decimal("-1"), -500, "abc", float("nan")])
def test_invalid_rent_is_rejected(rent) -> None:
    with pytest.raises(ValueError):
        calculate_fees(rent)
