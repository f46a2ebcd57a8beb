"""Notification model definitions."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from scheduling.core.timeutils import utcnow
from scheduling.database import Base


class Notification(Base):
    """In-app message addressed to a user."""
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True)
    content = Column(String, nullable=False)
    user = Column(Integer, nullable=False, index=True)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)
