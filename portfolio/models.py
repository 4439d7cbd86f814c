"""
SQLAlchemy models for the application.
All database models inherit from Base (declarative base).
"""
import uuid

from sqlalchemy import Column, Date, DateTime, String, Text
from sqlalchemy.sql import func
from portfolio.database import Base


def _new_photo_id() -> str:
    return str(uuid.uuid4())


class Photo(Base):
    """
    Photo record.
    Stores the storage path of the image asset plus free-form camera metadata.
    Rows created before storage_path existed only carry thumbnail_path/full_size_path.
    """
    __tablename__ = "photos"

    id = Column(String(36), primary_key=True, default=_new_photo_id)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True, index=True)

    storage_path = Column(String, nullable=True)
    thumbnail_path = Column(String, nullable=True)  # legacy
    full_size_path = Column(String, nullable=True)  # legacy

    camera = Column(String, nullable=True)
    lens = Column(String, nullable=True)
    aperture = Column(String, nullable=True)
    shutter_speed = Column(String, nullable=True)
    iso = Column(String, nullable=True)
    focal_length = Column(String, nullable=True)
    location = Column(String, nullable=True)
    date_taken = Column(Date, nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
