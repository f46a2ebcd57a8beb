"""Uploaded file definitions."""

from sqlalchemy import Column, Integer, String

from scheduling.core import config
from scheduling.database import Base


class File(Base):
    """Represents an uploaded file, used for provider avatars."""
    __tablename__ = "files"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    path = Column(String, nullable=False, unique=True)

    @property
    def url(self) -> str:
        return f"{config.APP_URL}/files/{self.path}"
