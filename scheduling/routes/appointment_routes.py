from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scheduling.auth.dependencies import get_current_user_id
from scheduling.core import config
from scheduling.core.errors import ServiceUnavailableError
from scheduling.core.timeutils import as_utc
from scheduling.database import ensure_appointment_schema, get_db
from scheduling.jobs.queue import Queue
from scheduling.jobs.registry import get_queue
from scheduling.services import appointment_service

router = APIRouter(tags=['appointments'])


class CreateAppointmentRequest(BaseModel):
    provider_id: int
    date: datetime


class AvatarResponse(BaseModel):
    id: int
    path: str
    url: str

    class Config:
        from_attributes = True


class ProviderResponse(BaseModel):
    id: int
    name: str
    avatar: AvatarResponse | None = None

    class Config:
        from_attributes = True


class AppointmentListItemResponse(BaseModel):
    id: int
    date: datetime
    past: bool
    cancelable: bool
    provider: ProviderResponse

    @field_validator('date')
    @classmethod
    def mark_date_as_utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    class Config:
        from_attributes = True


class AppointmentResponse(BaseModel):
    id: int
    user_id: int
    provider_id: int
    date: datetime
    canceled_at: datetime | None = None
    past: bool
    cancelable: bool

    @field_validator('date', 'canceled_at')
    @classmethod
    def mark_dates_as_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    class Config:
        from_attributes = True


def ensure_database_ready() -> None:
    try:
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        raise ServiceUnavailableError() from exc


@router.get('', response_model=list[AppointmentListItemResponse])
def list_appointments(
    page: int = Query(default=1, ge=1, le=config.APPOINTMENTS_MAX_PAGE),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        return appointment_service.list_appointments(db, user_id, page)
    except SQLAlchemyError as exc:
        raise ServiceUnavailableError() from exc


@router.post('', response_model=AppointmentResponse)
def create_appointment(
    data: CreateAppointmentRequest,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    ensure_database_ready()

    try:
        return appointment_service.create_appointment(db, user_id, data.provider_id, data.date)
    except SQLAlchemyError as exc:
        db.rollback()
        raise ServiceUnavailableError() from exc


@router.delete('/{appointment_id}', response_model=AppointmentResponse)
def cancel_appointment(
    appointment_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    queue: Queue = Depends(get_queue),
):
    ensure_database_ready()

    try:
        return appointment_service.cancel_appointment(db, user_id, appointment_id, queue)
    except SQLAlchemyError as exc:
        db.rollback()
        raise ServiceUnavailableError() from exc
