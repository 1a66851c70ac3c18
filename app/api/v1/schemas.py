import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field

from app.application.utils.validators import FieldError
from app.domain.entities.appointment import Appointment
from app.domain.entities.daily_summary import DailySummary
from app.domain.entities.notice import Notice
from app.domain.entities.provider import Provider
from app.domain.entities.service import Service


class TransitionTarget(str, Enum):
    confirmed = "confirmed"
    cancelled = "cancelled"


class ServiceSchema(BaseModel):
    id: str
    name: str
    price: float
    duration: int

    @staticmethod
    def from_entity(service: Service) -> "ServiceSchema":
        return ServiceSchema(id=service.id, name=service.name, price=float(service.price), duration=service.duration)


class ProviderSchema(BaseModel):
    id: str
    name: str
    specialty: str
    avatar_url: str | None = None
    rating: float

    @staticmethod
    def from_entity(provider: Provider) -> "ProviderSchema":
        return ProviderSchema(
            id=provider.id,
            name=provider.name,
            specialty=provider.specialty,
            avatar_url=provider.avatar_url,
            rating=provider.rating,
        )


class CustomerSchema(BaseModel):
    name: str = ""
    phone: str = ""
    email: str = ""


class DraftSchema(BaseModel):
    service_id: str | None = None
    provider_id: str | None = None
    date: dt.date | None = None
    time: str | None = None
    customer: CustomerSchema = Field(default_factory=CustomerSchema)


class StepValidationRequestSchema(BaseModel):
    step: str
    draft: DraftSchema


class FieldErrorSchema(BaseModel):
    field: str
    reason: str
    message: str

    @staticmethod
    def from_error(error: FieldError) -> "FieldErrorSchema":
        return FieldErrorSchema(field=error.field, reason=error.reason, message=error.message)


class StepValidationResponseSchema(BaseModel):
    ok: bool
    errors: list[FieldErrorSchema] = Field(default_factory=list)
    draft: DraftSchema


class NoticeSchema(BaseModel):
    title: str
    description: str
    variant: str = "default"

    @staticmethod
    def from_entity(notice: Notice) -> "NoticeSchema":
        return NoticeSchema(title=notice.title, description=notice.description, variant=notice.variant)


class AppointmentSchema(BaseModel):
    id: str
    provider_id: str
    service_id: str
    date: dt.date
    time: str
    customer_name: str
    customer_phone: str
    customer_email: str | None = None
    status: str
    service_name: str
    service_duration: int
    provider_name: str | None = None

    @staticmethod
    def from_entity(appointment: Appointment) -> "AppointmentSchema":
        return AppointmentSchema(
            id=appointment.id,
            provider_id=appointment.provider_id,
            service_id=appointment.service_id,
            date=appointment.date,
            time=appointment.time,
            customer_name=appointment.customer_name,
            customer_phone=appointment.customer_phone,
            customer_email=appointment.customer_email,
            status=appointment.status.value,
            service_name=appointment.service_label,
            service_duration=appointment.duration_label,
            provider_name=appointment.provider_name,
        )


class BookingResponseSchema(BaseModel):
    appointment: AppointmentSchema
    notice: NoticeSchema


class SummarySchema(BaseModel):
    pending: int
    confirmed: int
    total: int

    @staticmethod
    def from_entity(summary: DailySummary) -> "SummarySchema":
        return SummarySchema(**summary.as_dict())


class AgendaResponseSchema(BaseModel):
    date: dt.date
    appointments: list[AppointmentSchema]
    summary: SummarySchema


class StatusUpdateRequestSchema(BaseModel):
    status: TransitionTarget


class StatusUpdateResponseSchema(BaseModel):
    appointment: AppointmentSchema
    notice: NoticeSchema
