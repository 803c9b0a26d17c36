"""
SQLAlchemy database models for shared calculation records and feedback.
"""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from .base import Base


class SavedRecord(Base):
    """A calculation input and its summary, shared by short id."""

    __tablename__ = "saved_records"

    id = Column(String(16), primary_key=True)
    input_json = Column(JSON, nullable=False)
    summary_json = Column(JSON, nullable=False)
    label = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<SavedRecord(id='{self.id}', label='{self.label}')>"


class Feedback(Base):
    """Free-text user feedback."""

    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    contact = Column(String(200))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Feedback(id={self.id}, contact='{self.contact}')>"
