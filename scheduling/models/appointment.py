"""Appointment model definitions."""

from datetime import datetime, timedelta

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, text
from sqlalchemy.orm import relationship

from scheduling.core import config
from scheduling.core.timeutils import utcnow
from scheduling.database import Base
from scheduling.models.user import User


class Appointment(Base):
    """Represents a booking of a provider's hour by a customer."""
    __tablename__ = "appointments"
    __table_args__ = (
        Index('idx_appointments_user_date', 'user_id', 'date'),
        # One active booking per provider slot; canceled rows free the slot.
        Index(
            'uq_appointments_provider_date_active',
            'provider_id',
            'date',
            unique=True,
            postgresql_where=text('canceled_at IS NULL'),
            sqlite_where=text('canceled_at IS NULL'),
        ),
    )

    id = Column(Integer, primary_key=True)
    date = Column(DateTime, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    provider_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    canceled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship(User, foreign_keys=[user_id])
    provider = relationship(User, foreign_keys=[provider_id])

    @property
    def past(self) -> bool:
        return self.date < utcnow()

    def is_cancelable_at(self, now: datetime) -> bool:
        return now < self.date - timedelta(hours=config.CANCELLATION_NOTICE_HOURS)

    @property
    def cancelable(self) -> bool:
        return self.is_cancelable_at(utcnow())
