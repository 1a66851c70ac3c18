from __future__ import annotations

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.v1.schemas import (
    AgendaResponseSchema,
    AppointmentSchema,
    NoticeSchema,
    StatusUpdateRequestSchema,
    StatusUpdateResponseSchema,
    SummarySchema,
)
from app.application.exceptions import AccessDenied, AgendaUnavailable, TransitionError
from app.application.ports.record_store import RecordStorePort
from app.application.use_cases.appointment_lifecycle import (
    AppointmentLifecycleManager,
    transition_failed_notice,
    transition_notice,
)
from app.application.use_cases.daily_summary import summarize
from app.core.config import settings
from app.domain.entities.appointment import AppointmentStatus
from app.domain.entities.role import StaffContext
from app.wiring.dependencies import get_record_store, get_staff_context

router = APIRouter()
logger = logging.getLogger(__name__)


def business_today() -> date:
    return datetime.now(ZoneInfo(settings.BUSINESS_TIMEZONE)).date()


def get_lifecycle_manager(
    store: RecordStorePort = Depends(get_record_store),
    context: StaffContext = Depends(get_staff_context),
) -> AppointmentLifecycleManager:
    try:
        return AppointmentLifecycleManager(store=store, context=context, strict=settings.STRICT_TRANSITIONS)
    except AccessDenied as e:
        logger.info("Agenda access denied", extra={"role": context.role.value})
        raise HTTPException(status_code=403, detail=str(e))


@router.get("", response_model=AgendaResponseSchema)
async def daily_agenda(
    day: date | None = Query(None, alias="date"),
    manager: AppointmentLifecycleManager = Depends(get_lifecycle_manager),
):
    target_day = day or business_today()
    try:
        appointments = await manager.load_for_date(target_day)
    except AgendaUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))

    return AgendaResponseSchema(
        date=target_day,
        appointments=[AppointmentSchema.from_entity(a) for a in appointments],
        summary=SummarySchema.from_entity(summarize(appointments)),
    )


@router.post("/{appointment_id}/status", response_model=StatusUpdateResponseSchema)
async def update_status(
    appointment_id: str,
    req: StatusUpdateRequestSchema,
    manager: AppointmentLifecycleManager = Depends(get_lifecycle_manager),
):
    target = AppointmentStatus(req.status.value)
    try:
        appointment = await manager.transition(appointment_id, target)
    except TransitionError as e:
        notice = NoticeSchema.from_entity(transition_failed_notice()).model_dump()
        if e.reason == "not_found":
            raise HTTPException(status_code=404, detail=notice)
        if e.reason == "conflict":
            raise HTTPException(status_code=409, detail=notice)
        raise HTTPException(status_code=502, detail=notice)

    return StatusUpdateResponseSchema(
        appointment=AppointmentSchema.from_entity(appointment),
        notice=NoticeSchema.from_entity(transition_notice(target)),
    )
