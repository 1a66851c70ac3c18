from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from app.application.exceptions import BookingCoreError, IncompleteDraft, StoreRejected
from app.application.use_cases.booking_steps import BookingStep, step_errors
from app.application.use_cases.reserve_appointment import ReservationCommitter
from app.application.utils.validators import FieldError, format_phone, normalize_time, validate_time
from app.domain.entities.appointment import Appointment
from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.notice import Notice
from app.domain.entities.provider import Provider
from app.domain.entities.service import Service


class BookingWizard:
    """
    Holds the draft of one booking session and the step it is on.

    Updates replace the draft and clear the error of the field they touch.
    Forward navigation is gated by the step predicates; going back is allowed
    until the booking is confirmed.
    """

    def __init__(self, draft: BookingDraft | None = None) -> None:
        self._draft = draft or BookingDraft()
        self._step = BookingStep.SERVICE
        self._errors: dict[str, FieldError] = {}
        self._closed = False

    @property
    def draft(self) -> BookingDraft:
        return self._draft

    @property
    def step(self) -> BookingStep:
        return self._step

    @property
    def errors(self) -> dict[str, FieldError]:
        return dict(self._errors)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def can_advance(self) -> bool:
        return not self._closed and self._step != BookingStep.SUMMARY and not step_errors(self._step, self._draft)

    def select_service(self, service: Service) -> None:
        self._draft = self._draft.with_service(service)
        self._errors.pop("service", None)

    def select_provider(self, provider: Provider) -> None:
        self._draft = self._draft.with_provider(provider)
        self._errors.pop("provider", None)

    def select_date(self, day: date) -> None:
        self._draft = self._draft.with_date(day)
        self._errors.pop("date", None)

    def select_time(self, value: str) -> bool:
        normalized = normalize_time(value)
        if normalized is None:
            self._errors["time"] = validate_time(value) or FieldError(
                "time", "invalid", "Time must be in HH:MM format"
            )
            return False
        self._draft = self._draft.with_time(normalized)
        self._errors.pop("time", None)
        return True

    def update_name(self, value: str) -> None:
        self._draft = self._draft.with_customer(name=value)
        self._errors.pop("name", None)

    def update_phone(self, value: str) -> str:
        masked = format_phone(value)
        self._draft = self._draft.with_customer(phone=masked)
        self._errors.pop("phone", None)
        return masked

    def update_email(self, value: str) -> None:
        self._draft = self._draft.with_customer(email=value)
        self._errors.pop("email", None)

    def next(self) -> bool:
        if self._closed or self._step == BookingStep.SUMMARY:
            return False
        errors = step_errors(self._step, self._draft)
        if errors:
            self._errors.update({e.field: e for e in errors})
            return False
        self._step = self._step.following
        return True

    def back(self) -> bool:
        if self._closed or self._step == BookingStep.SERVICE:
            return False
        self._step = self._step.previous
        return True

    def close(self) -> None:
        """Freezes navigation once the booking is confirmed."""
        self._closed = True


@dataclass(frozen=True)
class SubmitResult:
    appointment: Appointment | None
    notice: Notice
    error: BookingCoreError | None = None

    @property
    def ok(self) -> bool:
        return self.appointment is not None


class SubmissionInFlight(BookingCoreError):
    """Raised when submit is called again before the previous submit resolved."""
    pass


class BookingSession:
    """
    One customer's booking interaction: the wizard plus the single in-flight
    latch that keeps a pending commit from being submitted twice.
    """

    def __init__(self, committer: ReservationCommitter, wizard: BookingWizard | None = None) -> None:
        self._committer = committer
        self.wizard = wizard or BookingWizard()
        self._submitting = False
        self._appointment: Appointment | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def appointment(self) -> Appointment | None:
        return self._appointment

    @property
    def is_confirmed(self) -> bool:
        return self._appointment is not None

    async def submit(self) -> SubmitResult:
        if self._appointment is not None:
            return SubmitResult(
                appointment=self._appointment,
                notice=booking_confirmed_notice(self._appointment.customer_name),
            )
        if self._submitting:
            raise SubmissionInFlight("A booking submission is already in progress")

        self._submitting = True
        try:
            appointment = await self._committer.commit(self.wizard.draft)
        except IncompleteDraft as e:
            return SubmitResult(
                appointment=None,
                notice=Notice(
                    title="Error",
                    description="Incomplete booking details. Please review your booking.",
                    variant="destructive",
                ),
                error=e,
            )
        except StoreRejected as e:
            return SubmitResult(
                appointment=None,
                notice=Notice(
                    title="Could not book",
                    description="We could not confirm your booking. Please try again.",
                    variant="destructive",
                ),
                error=e,
            )
        finally:
            self._submitting = False

        self._appointment = appointment
        self.wizard.close()
        return SubmitResult(
            appointment=appointment,
            notice=booking_confirmed_notice(appointment.customer_name),
        )


def booking_confirmed_notice(customer_name: str) -> Notice:
    return Notice(
        title="Booking confirmed!",
        description=f"{customer_name}, you will receive a confirmation by WhatsApp.",
    )
