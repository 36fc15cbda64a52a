# FILE: livetext/projects/models.py
"""
SQLAlchemy ORM model for the project registry.

A project is a name plus the absolute path of its source tree on disk.
"""
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, String, Text, DateTime

from livetext.db import Base


def utcnow():
    """Timezone-aware UTC now."""
    return datetime.now(timezone.utc)


class Project(Base):
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(255), nullable=False, index=True)
    path = Column(Text, nullable=False)  # Absolute root of the project tree
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_opened_at = Column(DateTime(timezone=True), nullable=True)
