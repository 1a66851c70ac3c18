from __future__ import annotations

import copy
import logging
import uuid
from datetime import date
from decimal import Decimal
from typing import Any

from app.application.exceptions import RecordStoreError
from app.application.ports.record_store import RecordStorePort
from app.infrastructure.store.seed_data import BARBERS, SERVICES


class MemoryRecordStore(RecordStorePort):
    """
    In-process tables for local runs and tests.

    `unique_slots` emulates a unique index on (barber_id, appointment_date,
    appointment_time) among appointments that are not cancelled.
    """

    def __init__(
        self,
        services: list[dict[str, Any]] | None = None,
        barbers: list[dict[str, Any]] | None = None,
        appointments: list[dict[str, Any]] | None = None,
        unique_slots: bool = False,
    ) -> None:
        self._services = copy.deepcopy(SERVICES if services is None else services)
        self._barbers = copy.deepcopy(BARBERS if barbers is None else barbers)
        self._appointments: dict[str, dict[str, Any]] = {}
        for row in appointments or []:
            stored = dict(row)
            stored.setdefault("id", uuid.uuid4().hex)
            self._appointments[str(stored["id"])] = stored
        self._unique_slots = unique_slots
        self._logger = logging.getLogger(__name__)

    async def select_services(self) -> list[dict[str, Any]]:
        rows = [
            {k: row.get(k) for k in ("id", "name", "price", "duration")}
            for row in self._services
            if row.get("is_active", True)
        ]
        return sorted(rows, key=lambda r: Decimal(str(r.get("price") or 0)))

    async def select_providers(self) -> list[dict[str, Any]]:
        rows = [
            {k: row.get(k) for k in ("id", "name", "specialty", "avatar_url")}
            for row in self._barbers
            if row.get("is_active", True)
        ]
        return sorted(rows, key=lambda r: r.get("name") or "")

    async def insert_appointment(self, row: dict[str, Any]) -> dict[str, Any]:
        if self._unique_slots and self._slot_taken(row):
            raise RecordStoreError("Slot already booked for this barber", status_code=409)

        stored = dict(row)
        stored["id"] = uuid.uuid4().hex
        self._appointments[stored["id"]] = stored
        self._logger.info(
            "Stored appointment",
            extra={"appointment_id": stored["id"], "date": stored.get("appointment_date")},
        )
        return dict(stored)

    async def select_appointments(self, day: date) -> list[dict[str, Any]]:
        key = day.isoformat()
        rows = [self._joined(row) for row in self._appointments.values() if _day_key(row) == key]
        return sorted(rows, key=lambda r: r.get("appointment_time") or "")

    async def update_appointment_status(
        self,
        appointment_id: str,
        status: str,
        expected_status: str | None = None,
    ) -> dict[str, Any] | None:
        row = self._appointments.get(appointment_id)
        if row is None:
            return None
        if expected_status is not None and row.get("status") != expected_status:
            return None
        row["status"] = status
        return self._joined(row)

    def _slot_taken(self, row: dict[str, Any]) -> bool:
        for existing in self._appointments.values():
            if existing.get("status") == "cancelled":
                continue
            if (
                existing.get("barber_id") == row.get("barber_id")
                and _day_key(existing) == _day_key(row)
                and existing.get("appointment_time") == row.get("appointment_time")
            ):
                return True
        return False

    def _joined(self, row: dict[str, Any]) -> dict[str, Any]:
        service = next((s for s in self._services if s["id"] == row.get("service_id")), None)
        barber = next((b for b in self._barbers if b["id"] == row.get("barber_id")), None)
        joined = dict(row)
        joined["services"] = {"name": service["name"], "duration": service["duration"]} if service else None
        joined["barbers"] = {"name": barber["name"]} if barber else None
        return joined


def _day_key(row: dict[str, Any]) -> str:
    return str(row.get("appointment_date") or "")[:10]
