from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from app.application.exceptions import RecordStoreError
from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.customer import Customer
from app.domain.entities.provider import Provider
from app.domain.entities.service import Service
from app.infrastructure.store.memory_store import MemoryRecordStore

SERVICES = [
    {"id": "s2", "name": "Haircut + Beard", "price": "75.00", "duration": 50, "is_active": True},
    {"id": "s1", "name": "Haircut", "price": 50, "duration": 30, "is_active": True},
    {"id": "s3", "name": "Retired", "price": "10.00", "duration": 10, "is_active": False},
]

BARBERS = [
    {"id": "p2", "name": "Zeca", "specialty": "Beards", "avatar_url": "https://img/zeca.png", "is_active": True},
    {"id": "p1", "name": "Bruno", "specialty": None, "avatar_url": "", "is_active": True},
    {"id": "p3", "name": "Inactive", "specialty": None, "avatar_url": None, "is_active": False},
]


class RecordingStore(MemoryRecordStore):
    """Memory store that counts calls and can be told to fail specific operations."""

    def __init__(self, fail_on: set[str] | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("services", SERVICES)
        kwargs.setdefault("barbers", BARBERS)
        super().__init__(**kwargs)
        self.fail_on = set(fail_on or ())
        self.calls: list[str] = []

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise RecordStoreError(f"{name} failed", status_code=503)

    async def select_services(self):
        self._record("select_services")
        return await super().select_services()

    async def select_providers(self):
        self._record("select_providers")
        return await super().select_providers()

    async def insert_appointment(self, row):
        self._record("insert_appointment")
        return await super().insert_appointment(row)

    async def select_appointments(self, day):
        self._record("select_appointments")
        return await super().select_appointments(day)

    async def update_appointment_status(self, appointment_id, status, expected_status=None):
        self._record("update_appointment_status")
        return await super().update_appointment_status(appointment_id, status, expected_status)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def service() -> Service:
    return Service(id="s1", name="Haircut", price=Decimal("50"), duration=30)


@pytest.fixture
def provider() -> Provider:
    return Provider(id="p1", name="Bruno", specialty="Barber")


@pytest.fixture
def complete_draft(service: Service, provider: Provider) -> BookingDraft:
    return BookingDraft(
        service=service,
        provider=provider,
        date=date(2025, 3, 10),
        time="14:30",
        customer=Customer(name="Ana Silva", phone="(11) 98765-4321"),
    )


def appointment_row(
    appointment_id: str,
    time: str,
    status: str = "pending",
    day: str = "2025-03-10",
    barber_id: str = "p1",
) -> dict[str, Any]:
    return {
        "id": appointment_id,
        "barber_id": barber_id,
        "service_id": "s1",
        "appointment_date": day,
        "appointment_time": time,
        "customer_name": f"Customer {appointment_id}",
        "customer_phone": "(11) 98765-4321",
        "customer_email": None,
        "status": status,
    }


@pytest.fixture
def make_row():
    return appointment_row


@pytest.fixture
def unique_store() -> RecordingStore:
    return RecordingStore(unique_slots=True)


@pytest.fixture
def make_store():
    return RecordingStore
