from __future__ import annotations

from datetime import date

from app.application.use_cases.daily_summary import summarize
from app.domain.entities.appointment import Appointment, AppointmentStatus


def _appointment(index: int, status: AppointmentStatus) -> Appointment:
    return Appointment(
        id=f"a{index}",
        provider_id="p1",
        service_id="s1",
        date=date(2025, 3, 10),
        time=f"{9 + index:02d}:00",
        customer_name="Ana Silva",
        customer_phone="(11) 98765-4321",
        status=status,
    )


def test_empty_day():
    assert summarize([]).as_dict() == {"pending": 0, "confirmed": 0, "total": 0}


def test_counts_by_status():
    statuses = [AppointmentStatus.pending] * 3 + [AppointmentStatus.confirmed] * 2
    appointments = [_appointment(i, s) for i, s in enumerate(statuses)]

    assert summarize(appointments).as_dict() == {"pending": 3, "confirmed": 2, "total": 5}


def test_cancelled_and_completed_count_only_in_total():
    appointments = [
        _appointment(0, AppointmentStatus.cancelled),
        _appointment(1, AppointmentStatus.completed),
        _appointment(2, AppointmentStatus.pending),
    ]

    summary = summarize(appointments)

    assert (summary.pending, summary.confirmed, summary.total) == (1, 0, 3)


def test_accepts_any_iterable():
    summary = summarize(_appointment(i, AppointmentStatus.confirmed) for i in range(2))
    assert summary.confirmed == 2
