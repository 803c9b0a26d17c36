"""Services around the calculation engine."""

from .record_service import (
    RecordError,
    RecordNotFoundError,
    RecordService,
    RecordValidationError,
)

__all__ = ["RecordService", "RecordError", "RecordNotFoundError", "RecordValidationError"]
