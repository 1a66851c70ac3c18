from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.application.utils.validators import FieldError


class BookingCoreError(RuntimeError):
    """Base class for failures surfaced by the booking and agenda use cases."""
    pass


class RecordStoreError(RuntimeError):
    """Raised by record store adapters (unreachable store, constraint violation, bad response)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CatalogUnavailable(BookingCoreError):
    """Raised when services or providers could not be fetched. Recoverable by re-fetch."""
    pass


class IncompleteDraft(BookingCoreError):
    """Raised when a draft reaches commit without passing every step predicate."""

    def __init__(self, errors: list[FieldError]) -> None:
        fields = ", ".join(e.field for e in errors) or "unknown"
        super().__init__(f"Booking draft is incomplete: {fields}")
        self.errors = errors


class StoreRejected(BookingCoreError):
    """Raised when the record store refused or failed the appointment insert."""
    pass


class TransitionError(BookingCoreError):
    """Raised when a status update did not reach the store. Local state is left as it was."""

    def __init__(self, appointment_id: str, reason: str, message: str | None = None) -> None:
        super().__init__(message or f"Could not update appointment {appointment_id}: {reason}")
        self.appointment_id = appointment_id
        self.reason = reason


class AgendaUnavailable(BookingCoreError):
    """Raised when the appointments of a day could not be loaded."""
    pass


class AccessDenied(BookingCoreError):
    """Raised when the resolved role may not manage the agenda."""
    pass
