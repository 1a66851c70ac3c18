from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum

UNSPECIFIED_SERVICE_NAME = "Service not specified"
FALLBACK_SERVICE_DURATION = 30


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


@dataclass(frozen=True)
class Appointment:
    id: str
    provider_id: str
    service_id: str
    date: date
    time: str  # HH:MM
    customer_name: str
    customer_phone: str
    customer_email: str | None = None
    status: AppointmentStatus = AppointmentStatus.pending
    # Joined columns, present when the store query includes them
    service_name: str | None = None
    service_duration: int | None = None
    provider_name: str | None = None

    @property
    def service_label(self) -> str:
        return self.service_name or UNSPECIFIED_SERVICE_NAME

    @property
    def duration_label(self) -> int:
        return self.service_duration or FALLBACK_SERVICE_DURATION

    def with_status(self, status: AppointmentStatus) -> "Appointment":
        return replace(self, status=status)
