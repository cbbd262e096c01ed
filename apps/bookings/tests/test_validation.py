"""Tests for viewing request form validation."""

from __future__ import annotations

from datetime import date, time

from apps.bookings.domain.validation import normalize_phone, validate_booking_request

TODAY = date(2026, 5, 10)


def valid_data(**overrides) -> dict:
    data = {
        "tenant_name": "Amina Juma",
        "tenant_phone": "0712345678",
        "tenant_email": "amina@example.com",
        "preferred_viewing_date": date(2026, 5, 11),
        "preferred_viewing_time": time(10, 0),
    }
    data.update(overrides)
    return data


def test_valid_request_has_no_errors() -> None:
    assert validate_booking_request(valid_data(), TODAY) == {}


def test_international_and_spaced_phone_numbers() -> None:
    assert validate_booking_request(valid_data(tenant_phone="+255 612 345 678"), TODAY) == {}
    assert normalize_phone(" 0712 345 678 ") == "0712345678"


def test_short_phone_is_rejected() -> None:
    errors = validate_booking_request(valid_data(tenant_phone="123456"), TODAY)
    assert errors == {"tenant_phone": "Please enter a valid Tanzanian phone number"}


def test_landline_prefix_is_rejected() -> None:
    errors = validate_booking_request(valid_data(tenant_phone="0512345678"), TODAY)
    assert "tenant_phone" in errors


def test_missing_fields_are_all_reported() -> None:
    errors = validate_booking_request({}, TODAY)
    assert errors == {
        "tenant_name": "Full name is required",
        "tenant_phone": "Phone number is required",
        "tenant_email": "Email address is required",
        "preferred_viewing_date": "Please select a viewing date",
        "preferred_viewing_time": "Please select a viewing time",
    }


def test_viewing_date_must_be_after_today() -> None:
    errors = validate_booking_request(valid_data(preferred_viewing_date=TODAY), TODAY)
    assert errors == {"preferred_viewing_date": "Viewing date must be after today"}


def test_lunch_hour_is_not_a_slot() -> None:
    errors = validate_booking_request(valid_data(preferred_viewing_time=time(13, 0)), TODAY)
    assert errors == {"preferred_viewing_time": "Please select a viewing time"}


def test_string_values_are_parsed() -> None:
    data = valid_data(preferred_viewing_date="2026-05-12", preferred_viewing_time="17:00")
    assert validate_booking_request(data, TODAY) == {}


def test_bad_email() -> None:
    assert "tenant_email" in validate_booking_request(valid_data(tenant_email="amina@example"), TODAY)


def test_new_requests_start_pending() -> None:
    assert validate_booking_request(valid_data(status="pending"), TODAY) == {}
    errors = validate_booking_request(valid_data(status="approved"), TODAY)
    assert errors == {"status": "New booking requests must start as pending"}


def test_blank_contact_fields_are_reported_as_missing() -> None:
    errors = validate_booking_request(valid_data(tenant_phone="   ", tenant_email=""), TODAY)
    assert errors == {
        "tenant_phone": "Phone number is required",
        "tenant_email": "Email address is required",
    }
