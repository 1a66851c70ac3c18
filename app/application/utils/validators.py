from __future__ import annotations

import re
from dataclasses import dataclass

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
NON_DIGITS = re.compile(r"\D")

MIN_NAME_LENGTH = 3
MIN_PHONE_DIGITS = 10
MAX_PHONE_DIGITS = 11


@dataclass(frozen=True)
class FieldError:
    field: str
    reason: str  # "required" | "too_short" | "invalid"
    message: str


def phone_digits(value: str | None) -> str:
    return NON_DIGITS.sub("", value or "")


def format_phone(value: str | None) -> str:
    """
    Mask phone input as it is typed.

    Tolerates any partial input and is idempotent on its own output:
      "11"           -> "11"
      "119123"       -> "(11) 9123"
      "1191234567"   -> "(11) 9123-4567"
      "11912345678"  -> "(11) 91234-5678"
    """
    digits = phone_digits(value)[:MAX_PHONE_DIGITS]
    if len(digits) <= 2:
        return digits
    if len(digits) <= 6:
        return f"({digits[:2]}) {digits[2:]}"
    if len(digits) < MAX_PHONE_DIGITS:
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"


def normalize_time(value: str | None) -> str | None:
    """Return "HH:MM" for "H:MM", "HH:MM" or "HH:MM:SS" input, otherwise None."""
    raw = (value or "").strip()
    if raw.count(":") == 2:
        raw = raw.rsplit(":", 1)[0]
    if len(raw) == 4 and raw[1] == ":":
        raw = f"0{raw}"
    return raw if TIME_PATTERN.match(raw) else None


def validate_name(name: str | None) -> FieldError | None:
    cleaned = (name or "").strip()
    if not cleaned:
        return FieldError("name", "required", "Full name is required (at least 3 characters)")
    if len(cleaned) < MIN_NAME_LENGTH:
        return FieldError("name", "too_short", "Full name is required (at least 3 characters)")
    return None


def validate_phone(phone: str | None) -> FieldError | None:
    digits = phone_digits(phone)
    if not digits:
        return FieldError("phone", "required", "Phone number is required")
    if not MIN_PHONE_DIGITS <= len(digits) <= MAX_PHONE_DIGITS:
        return FieldError("phone", "invalid", "Invalid phone number")
    return None


def validate_email(email: str | None) -> FieldError | None:
    if not email:
        return None
    if not EMAIL_PATTERN.match(email):
        return FieldError("email", "invalid", "Invalid email")
    return None


def validate_time(time: str | None) -> FieldError | None:
    if not time:
        return FieldError("time", "required", "Choose a time")
    if normalize_time(time) is None:
        return FieldError("time", "invalid", "Time must be in HH:MM format")
    return None
