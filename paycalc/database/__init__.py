"""Database models and configuration for the saved-record store."""

from .base import Base, create_tables, get_engine, get_session
from .models import Feedback, SavedRecord

__all__ = [
    "Base",
    "create_tables",
    "get_engine",
    "get_session",
    "SavedRecord",
    "Feedback",
]
