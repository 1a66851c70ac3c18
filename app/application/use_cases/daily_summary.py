from __future__ import annotations

from collections.abc import Iterable

from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.daily_summary import DailySummary


def summarize(appointments: Iterable[Appointment]) -> DailySummary:
    pending = confirmed = total = 0
    for appointment in appointments:
        total += 1
        if appointment.status == AppointmentStatus.pending:
            pending += 1
        elif appointment.status == AppointmentStatus.confirmed:
            confirmed += 1
    return DailySummary(pending=pending, confirmed=confirmed, total=total)
