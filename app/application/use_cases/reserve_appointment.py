from __future__ import annotations

import logging

from app.application.exceptions import IncompleteDraft, RecordStoreError, StoreRejected
from app.application.ports.record_store import RecordStorePort
from app.application.use_cases.booking_steps import draft_errors
from app.application.utils.records import appointment_from_row, appointment_row_from_draft
from app.domain.entities.appointment import Appointment
from app.domain.entities.booking_draft import BookingDraft


class ReservationCommitter:
    """
    Turns a completed draft into a persisted pending appointment with a single insert.

    Not idempotent: committing the same draft twice creates two appointments.
    Callers guard against repeated submission (see BookingSession).
    """

    def __init__(self, store: RecordStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    async def commit(self, draft: BookingDraft) -> Appointment:
        errors = draft_errors(draft)
        if errors:
            self._logger.warning(
                "Refusing to commit incomplete draft",
                extra={"reason": ",".join(e.field for e in errors)},
            )
            raise IncompleteDraft(errors)

        row = appointment_row_from_draft(draft)
        try:
            stored = await self._store.insert_appointment(row)
        except RecordStoreError as e:
            self._logger.error(
                "Error creating appointment",
                extra={
                    "error": str(e),
                    "service_id": row["service_id"],
                    "provider_id": row["barber_id"],
                    "date": row["appointment_date"],
                },
            )
            raise StoreRejected("Could not complete booking, try again") from e

        # The store echoes what it saved; anything missing falls back to what was sent.
        merged = {**row, **(stored or {})}
        if not merged.get("id"):
            raise StoreRejected("Store did not return an appointment id")
        try:
            appointment = appointment_from_row(merged)
        except (KeyError, ValueError) as e:
            self._logger.warning(
                "Unreadable appointment echo, using sent row",
                extra={"appointment_id": merged["id"], "error": str(e)},
            )
            appointment = appointment_from_row({**row, "id": merged["id"]})

        self._logger.info(
            "Appointment created",
            extra={
                "appointment_id": appointment.id,
                "status": appointment.status.value,
                "date": appointment.date.isoformat(),
            },
        )
        return appointment
