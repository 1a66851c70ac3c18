"""
Tests for field validators and the phone mask.
"""

from __future__ import annotations

from app.application.utils.validators import (
    format_phone,
    normalize_time,
    validate_email,
    validate_name,
    validate_phone,
    validate_time,
)


def test_format_phone_full_mobile_number():
    assert format_phone("11912345678") == "(11) 91234-5678"


def test_format_phone_partial_input():
    assert format_phone("") == ""
    assert format_phone("1") == "1"
    assert format_phone("11") == "11"
    assert format_phone("119") == "(11) 9"
    assert format_phone("119123") == "(11) 9123"
    assert format_phone("1191234") == "(11) 9123-4"


def test_format_phone_ten_digit_landline():
    assert format_phone("1132345678") == "(11) 3234-5678"


def test_format_phone_is_idempotent_on_formatted_input():
    for value in ("(11) 91234-5678", "(11) 3234-5678", "(11) 9123", "11"):
        assert format_phone(value) == value
        assert format_phone(format_phone(value)) == value


def test_format_phone_strips_noise_and_caps_length():
    assert format_phone("+55 (11) 9 1234-5678") == "(55) 11912-3456"
    assert format_phone("119123456789999") == "(11) 91234-5678"
    assert format_phone("abc") == ""
    assert format_phone(None) == ""


def test_validate_name():
    assert validate_name("Ana") is None
    assert validate_name("  Ana Silva  ") is None
    assert validate_name("Al").reason == "too_short"
    assert validate_name("   ").reason == "required"
    assert validate_name(None).field == "name"


def test_validate_phone_digit_bounds():
    assert validate_phone("(11) 3234-5678") is None
    assert validate_phone("(11) 91234-5678") is None
    assert validate_phone("(11) 9123").reason == "invalid"
    assert validate_phone("119123456789").reason == "invalid"
    assert validate_phone("").reason == "required"


def test_validate_email_is_optional():
    assert validate_email("") is None
    assert validate_email(None) is None
    assert validate_email("ana@example.com") is None
    assert validate_email("ana@example").reason == "invalid"
    assert validate_email("ana silva@example.com").field == "email"


def test_normalize_time():
    assert normalize_time("14:30") == "14:30"
    assert normalize_time("9:05") == "09:05"
    assert normalize_time("14:30:00") == "14:30"
    assert normalize_time("24:00") is None
    assert normalize_time("2pm") is None
    assert normalize_time(None) is None


def test_validate_time():
    assert validate_time("14:30") is None
    assert validate_time(None).reason == "required"
    assert validate_time("14h30").reason == "invalid"
