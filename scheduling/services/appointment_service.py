"""Appointment business rules: listing, booking and cancelling.

Services take an open SQLAlchemy session and raise ``SchedulingError``
subclasses on rule violations. Database failures other than the slot
uniqueness constraint propagate to the caller.
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from scheduling.core import config
from scheduling.core.errors import (
    AlreadyCanceledError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PastDateError,
    ValidationError,
)
from scheduling.core.formatting import AppointmentDateFormatter, default_formatter
from scheduling.core.timeutils import start_of_hour, to_utc_naive, utcnow
from scheduling.jobs.cancellation_mail import CancellationMail
from scheduling.jobs.queue import Queue
from scheduling.models.appointment import Appointment
from scheduling.models.notification import Notification
from scheduling.models.user import User


logger = logging.getLogger(__name__)


def list_appointments(db: Session, user_id: int, page: int = 1) -> list[Appointment]:
    if not 1 <= page <= config.APPOINTMENTS_MAX_PAGE:
        raise ValidationError()

    page_size = config.APPOINTMENTS_PAGE_SIZE
    return (
        db.query(Appointment)
        .options(joinedload(Appointment.provider).joinedload(User.avatar))
        .filter(
            Appointment.user_id == user_id,
            Appointment.canceled_at.is_(None),
        )
        .order_by(Appointment.date.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )


def is_slot_available(db: Session, provider_id: int, date: datetime) -> bool:
    existing = db.query(Appointment.id).filter(
        Appointment.provider_id == provider_id,
        Appointment.canceled_at.is_(None),
        Appointment.date == date,
    ).first()
    return existing is None


def create_appointment(
    db: Session,
    user_id: int,
    provider_id: int,
    date: datetime,
    formatter: AppointmentDateFormatter | None = None,
    now: datetime | None = None,
) -> Appointment:
    formatter = formatter or default_formatter
    now = now or utcnow()

    if provider_id == user_id:
        raise AuthorizationError('Number of provider can not be the same of user')

    is_provider = db.query(User.id).filter(
        User.id == provider_id,
        User.provider.is_(True),
    ).first()
    if not is_provider:
        raise AuthorizationError('You can only create appointments with providers')

    # Floor the wall-clock hour the caller sent, then store it as UTC.
    hour_start = to_utc_naive(start_of_hour(date))
    if hour_start < now:
        raise PastDateError()

    if not is_slot_available(db, provider_id, hour_start):
        raise ConflictError()

    appointment = Appointment(user_id=user_id, provider_id=provider_id, date=hour_start)
    db.add(appointment)

    customer = db.get(User, user_id)
    customer_name = customer.name if customer else f'usuário {user_id}'
    db.add(
        Notification(
            content=f'Novo agendamento de {customer_name} para {formatter.format(hour_start)}',
            user=provider_id,
        )
    )

    try:
        db.commit()
    except IntegrityError as exc:
        # Another request booked the slot between the check and the insert.
        db.rollback()
        raise ConflictError() from exc

    db.refresh(appointment)
    logger.info(
        'Appointment %s booked by user %s with provider %s for %s',
        appointment.id,
        user_id,
        provider_id,
        appointment.date.isoformat(),
    )
    return appointment


def find_appointment(db: Session, appointment_id: int) -> Appointment | None:
    return (
        db.query(Appointment)
        .options(joinedload(Appointment.provider), joinedload(Appointment.user))
        .filter(Appointment.id == appointment_id)
        .first()
    )


def cancellation_snapshot(appointment: Appointment) -> dict[str, Any]:
    return {
        'id': appointment.id,
        'date': appointment.date.isoformat(),
        'canceled_at': appointment.canceled_at.isoformat() if appointment.canceled_at else None,
        'user_id': appointment.user_id,
        'provider_id': appointment.provider_id,
        'provider': {
            'name': appointment.provider.name,
            'email': appointment.provider.email,
        },
        'user': {
            'name': appointment.user.name,
        },
    }


def cancel_appointment(
    db: Session,
    user_id: int,
    appointment_id: int,
    queue: Queue,
    now: datetime | None = None,
) -> Appointment:
    now = now or utcnow()

    appointment = find_appointment(db, appointment_id)
    if appointment is None:
        raise NotFoundError()

    if appointment.user_id != user_id:
        raise AuthorizationError("You don't have permission to cancel this appointment")

    if appointment.canceled_at is not None:
        raise AlreadyCanceledError()

    if not appointment.is_cancelable_at(now):
        raise AuthorizationError(
            f'You can only cancel appointments {config.CANCELLATION_NOTICE_HOURS} hours in advance'
        )

    appointment.canceled_at = now
    db.commit()
    db.refresh(appointment)
    logger.info('Appointment %s canceled by user %s', appointment.id, user_id)

    try:
        queue.add(CancellationMail.key, {'appointment': cancellation_snapshot(appointment)})
    except Exception:
        logger.exception('Could not enqueue cancellation mail for appointment %s', appointment.id)

    return appointment
