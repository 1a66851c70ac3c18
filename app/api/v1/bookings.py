from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import (
    AppointmentSchema,
    BookingResponseSchema,
    DraftSchema,
    FieldErrorSchema,
    NoticeSchema,
    StepValidationRequestSchema,
    StepValidationResponseSchema,
)
from app.application.exceptions import CatalogUnavailable, IncompleteDraft, StoreRejected
from app.application.use_cases.booking_steps import BookingStep, step_errors
from app.application.use_cases.booking_wizard import booking_confirmed_notice
from app.application.use_cases.catalog import CatalogLoader
from app.application.use_cases.reserve_appointment import ReservationCommitter
from app.application.utils.validators import FieldError, format_phone, normalize_time
from app.domain.entities.booking_draft import BookingDraft
from app.domain.entities.customer import Customer
from app.domain.entities.notice import Notice
from app.wiring.dependencies import get_catalog_loader, get_reservation_committer

router = APIRouter()
logger = logging.getLogger(__name__)

BOOKING_FAILED = Notice(
    title="Could not book",
    description="We could not confirm your booking. Please try again.",
    variant="destructive",
)


async def _resolve_draft(payload: DraftSchema, loader: CatalogLoader) -> tuple[BookingDraft, list[FieldError]]:
    """Build a draft from catalog ids. Unknown ids become field errors, never store calls."""
    errors: list[FieldError] = []
    service = provider = None

    if payload.service_id:
        services = await loader.load_services()
        service = next((s for s in services if s.id == payload.service_id), None)
        if service is None:
            errors.append(FieldError("service", "invalid", "This service is not available"))

    if payload.provider_id:
        providers = await loader.load_providers()
        provider = next((p for p in providers if p.id == payload.provider_id), None)
        if provider is None:
            errors.append(FieldError("provider", "invalid", "This barber is not available"))

    draft = BookingDraft(
        service=service,
        provider=provider,
        date=payload.date,
        time=normalize_time(payload.time) or payload.time,
        customer=Customer(
            name=payload.customer.name,
            phone=format_phone(payload.customer.phone),
            email=payload.customer.email.strip(),
        ),
    )
    return draft, errors


def _draft_schema(payload: DraftSchema, draft: BookingDraft) -> DraftSchema:
    return payload.model_copy(
        update={
            "time": draft.time,
            "customer": payload.customer.model_copy(update={"phone": draft.customer.phone}),
        }
    )


@router.post("/validate", response_model=StepValidationResponseSchema)
async def validate_step(
    req: StepValidationRequestSchema,
    loader: CatalogLoader = Depends(get_catalog_loader),
):
    try:
        step = BookingStep.parse(req.step)
    except (KeyError, ValueError):
        raise HTTPException(status_code=400, detail=f"Unknown step: {req.step}")

    try:
        draft, errors = await _resolve_draft(req.draft, loader)
    except CatalogUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    relevant = [e for e in errors if _belongs_to(step, e.field)]
    relevant.extend(e for e in step_errors(step, draft) if e.field not in {r.field for r in relevant})

    return StepValidationResponseSchema(
        ok=not relevant,
        errors=[FieldErrorSchema.from_error(e) for e in relevant],
        draft=_draft_schema(req.draft, draft),
    )


@router.post("", response_model=BookingResponseSchema, status_code=201)
async def create_booking(
    payload: DraftSchema,
    loader: CatalogLoader = Depends(get_catalog_loader),
    committer: ReservationCommitter = Depends(get_reservation_committer),
):
    try:
        draft, errors = await _resolve_draft(payload, loader)
    except CatalogUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    try:
        if errors:
            raise IncompleteDraft(errors)
        appointment = await committer.commit(draft)
    except IncompleteDraft as e:
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(e),
                "errors": [FieldErrorSchema.from_error(err).model_dump() for err in e.errors],
            },
        )
    except StoreRejected as e:
        logger.warning("Booking rejected by store", extra={"reason": str(e)})
        raise HTTPException(status_code=502, detail=NoticeSchema.from_entity(BOOKING_FAILED).model_dump())

    return BookingResponseSchema(
        appointment=AppointmentSchema.from_entity(appointment),
        notice=NoticeSchema.from_entity(booking_confirmed_notice(appointment.customer_name)),
    )


def _belongs_to(step: BookingStep, field: str) -> bool:
    return (step, field) in {
        (BookingStep.SERVICE, "service"),
        (BookingStep.PROVIDER, "provider"),
    }
