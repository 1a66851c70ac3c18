from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from app.application.utils.validators import normalize_time
from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.provider import DEFAULT_RATING, Provider
from app.domain.entities.service import Service


def service_from_row(row: dict[str, Any]) -> Service:
    try:
        price = Decimal(str(row.get("price") or 0))
    except InvalidOperation:
        raise ValueError(f"Invalid price for service {row.get('id')}: {row.get('price')!r}")
    duration = int(row.get("duration") or 0)
    if price < 0:
        raise ValueError(f"Negative price for service {row.get('id')}")
    if duration <= 0:
        raise ValueError(f"Non-positive duration for service {row.get('id')}")
    return Service(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        price=price,
        duration=duration,
    )


def provider_from_row(row: dict[str, Any], default_specialty: str) -> Provider:
    return Provider(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        specialty=row.get("specialty") or default_specialty,
        avatar_url=row.get("avatar_url") or None,
        rating=DEFAULT_RATING,
    )


def appointment_row_from_draft(draft: BookingDraft) -> dict[str, Any]:
    """Insert payload. Status is always pending, the date is the chosen calendar day as-is."""
    if draft.service is None or draft.provider is None or draft.date is None or draft.time is None:
        raise ValueError("Draft is missing service, provider, date or time")
    return {
        "barber_id": draft.provider.id,
        "service_id": draft.service.id,
        "appointment_date": draft.date.isoformat(),
        "appointment_time": normalize_time(draft.time) or draft.time,
        "customer_name": draft.customer.name.strip(),
        "customer_phone": draft.customer.phone,
        "customer_email": draft.customer.email.strip() or None,
        "status": AppointmentStatus.pending.value,
    }


def appointment_from_row(row: dict[str, Any]) -> Appointment:
    raw_date = row.get("appointment_date")
    day = raw_date if isinstance(raw_date, date) else date.fromisoformat(str(raw_date)[:10])
    raw_time = str(row.get("appointment_time") or "")
    service = row.get("services") or {}
    barber = row.get("barbers") or {}
    return Appointment(
        id=str(row["id"]),
        provider_id=str(row.get("barber_id") or ""),
        service_id=str(row.get("service_id") or ""),
        date=day,
        time=normalize_time(raw_time) or raw_time[:5],
        customer_name=row.get("customer_name") or "",
        customer_phone=row.get("customer_phone") or "",
        customer_email=row.get("customer_email") or None,
        status=AppointmentStatus(row.get("status") or AppointmentStatus.pending.value),
        service_name=service.get("name"),
        service_duration=service.get("duration"),
        provider_name=barber.get("name"),
    )
