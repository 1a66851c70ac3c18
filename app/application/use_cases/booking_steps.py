from __future__ import annotations

from enum import IntEnum

from app.application.utils.validators import (
    FieldError,
    validate_email,
    validate_name,
    validate_phone,
    validate_time,
)
from app.domain.entities.booking_draft import BookingDraft


class BookingStep(IntEnum):
    SERVICE = 1
    PROVIDER = 2
    DATETIME = 3
    CUSTOMER = 4
    SUMMARY = 5

    @property
    def previous(self) -> "BookingStep":
        return BookingStep(max(self.value - 1, BookingStep.SERVICE.value))

    @property
    def following(self) -> "BookingStep":
        return BookingStep(min(self.value + 1, BookingStep.SUMMARY.value))

    @staticmethod
    def parse(value: str | int) -> "BookingStep":
        if isinstance(value, int):
            return BookingStep(value)
        return BookingStep[str(value).strip().upper()]


def step_errors(step: BookingStep, draft: BookingDraft) -> list[FieldError]:
    """Field errors blocking forward navigation out of `step`. Empty means the step is complete."""
    if step == BookingStep.SERVICE:
        return [] if draft.service else [FieldError("service", "required", "Choose a service")]

    if step == BookingStep.PROVIDER:
        return [] if draft.provider else [FieldError("provider", "required", "Choose a barber")]

    if step == BookingStep.DATETIME:
        errors: list[FieldError] = []
        if draft.date is None:
            errors.append(FieldError("date", "required", "Choose a date"))
        time_error = validate_time(draft.time)
        if time_error:
            errors.append(time_error)
        return errors

    if step == BookingStep.CUSTOMER:
        customer = draft.customer
        checks = (
            validate_name(customer.name),
            validate_phone(customer.phone),
            validate_email(customer.email),
        )
        return [e for e in checks if e is not None]

    return []


def is_step_complete(step: BookingStep, draft: BookingDraft) -> bool:
    return not step_errors(step, draft)


def draft_errors(draft: BookingDraft) -> list[FieldError]:
    """Errors across every step before the summary."""
    errors: list[FieldError] = []
    for step in BookingStep:
        if step == BookingStep.SUMMARY:
            break
        errors.extend(step_errors(step, draft))
    return errors
