from __future__ import annotations

import logging
from datetime import date

from app.application.exceptions import (
    AccessDenied,
    AgendaUnavailable,
    RecordStoreError,
    TransitionError,
)
from app.application.ports.record_store import RecordStorePort
from app.application.utils.records import appointment_from_row
from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.notice import Notice
from app.domain.entities.role import StaffContext

TRANSITION_TARGETS = (AppointmentStatus.confirmed, AppointmentStatus.cancelled)


class AppointmentLifecycleManager:
    """
    Staff view over one day's appointments.

    Holds the loaded day as an in-memory projection. A transition is sent to the
    store first and patched into the projection only once the store confirmed it.
    By default the update is a blind overwrite (last write wins); with `strict=True`
    only a pending appointment is updated.
    """

    def __init__(self, store: RecordStorePort, context: StaffContext, strict: bool = False) -> None:
        if not context.can_manage_agenda:
            raise AccessDenied("You do not have permission to manage the agenda")
        self._store = store
        self._context = context
        self._strict = strict
        self._day: date | None = None
        self._appointments: list[Appointment] = []
        self._logger = logging.getLogger(__name__)

    @property
    def day(self) -> date | None:
        return self._day

    @property
    def appointments(self) -> list[Appointment]:
        return list(self._appointments)

    async def load_for_date(self, day: date) -> list[Appointment]:
        try:
            rows = await self._store.select_appointments(day)
            loaded = [appointment_from_row(row) for row in rows]
        except (RecordStoreError, KeyError, ValueError) as e:
            self._logger.error(
                "Error fetching appointments",
                extra={"error": str(e), "date": day.isoformat()},
            )
            raise AgendaUnavailable("Could not load the appointments") from e

        self._day = day
        self._appointments = sorted(
            (a for a in loaded if a.date == day),
            key=lambda a: a.time,
        )
        return self.appointments

    async def transition(self, appointment_id: str, target: AppointmentStatus | str) -> Appointment:
        status = AppointmentStatus(target)
        if status not in TRANSITION_TARGETS:
            raise ValueError(f"Unsupported transition target: {status.value}")

        expected = AppointmentStatus.pending.value if self._strict else None
        try:
            row = await self._store.update_appointment_status(
                appointment_id, status.value, expected_status=expected
            )
        except RecordStoreError as e:
            self._logger.error(
                "Error updating appointment",
                extra={"error": str(e), "appointment_id": appointment_id, "status": status.value},
            )
            raise TransitionError(appointment_id, "store_error") from e

        if row is None:
            reason = "conflict" if self._strict else "not_found"
            raise TransitionError(appointment_id, reason)

        updated = self._patch(appointment_id, status)
        if updated is None:
            updated = appointment_from_row(row).with_status(status)

        self._logger.info(
            "Appointment status updated",
            extra={
                "appointment_id": appointment_id,
                "status": status.value,
                "role": self._context.role.value,
            },
        )
        return updated

    def _patch(self, appointment_id: str, status: AppointmentStatus) -> Appointment | None:
        patched: Appointment | None = None
        result: list[Appointment] = []
        for appointment in self._appointments:
            if appointment.id == appointment_id:
                appointment = appointment.with_status(status)
                patched = appointment
            result.append(appointment)
        self._appointments = result
        return patched


def transition_notice(status: AppointmentStatus) -> Notice:
    if status == AppointmentStatus.confirmed:
        return Notice(title="Confirmed!", description="Appointment confirmed successfully.")
    return Notice(title="Cancelled", description="Appointment cancelled successfully.")


def transition_failed_notice() -> Notice:
    return Notice(
        title="Error",
        description="Could not update the appointment.",
        variant="destructive",
    )
