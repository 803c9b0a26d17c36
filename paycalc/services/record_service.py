"""
Record service for sharing calculations by short id and collecting feedback.

The calculation engine never depends on this service; it stores whatever
input and summary it is handed.
"""

import logging
import secrets
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from paycalc.database.base import get_session
from paycalc.database.models import Feedback, SavedRecord

logger = logging.getLogger(__name__)

SHORT_ID_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
SHORT_ID_LENGTH = 8
MAX_ID_LENGTH = 16
MAX_FEEDBACK_LENGTH = 2000
MAX_CONTACT_LENGTH = 200


class RecordError(Exception):
    """Base exception for record store errors."""


class RecordValidationError(RecordError):
    """Raised when a request to the record store is malformed."""


class RecordNotFoundError(RecordError):
    """Raised when no record has the requested id."""


def generate_short_id(length: int = SHORT_ID_LENGTH) -> str:
    """Random lower-case alphanumeric id."""
    return "".join(secrets.choice(SHORT_ID_ALPHABET) for _ in range(length))


class RecordService:
    """Saves and loads calculation records."""

    def __init__(
        self,
        session_factory: Callable[[], Session] = get_session,
        share_base_url: str = "",
    ) -> None:
        self.session_factory = session_factory
        self.share_base_url = share_base_url
        self.logger = logging.getLogger(__name__)

    def save(
        self,
        input_data: Optional[Dict[str, Any]],
        summary: Optional[Dict[str, Any]],
        label: Optional[str] = None,
    ) -> Dict[str, str]:
        """
        Store a calculation.

        Args:
            input_data: Calculation input as a JSON-compatible dict
            summary: Calculation result as a JSON-compatible dict
            label: Optional user label

        Returns:
            Dictionary with the record ``id`` and its share ``url``

        Raises:
            RecordValidationError: If input or summary is missing
            RecordError: If the write fails
        """
        if not input_data or not summary:
            raise RecordValidationError("Missing input or summary")

        record_id = generate_short_id()
        session = self.session_factory()
        try:
            session.add(
                SavedRecord(
                    id=record_id,
                    input_json=input_data,
                    summary_json=summary,
                    label=label,
                )
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            self.logger.error(f"Failed to save record: {str(e)}")
            raise RecordError(f"Failed to save record: {e}") from e
        finally:
            session.close()

        self.logger.info(f"Saved record {record_id}")
        return {"id": record_id, "url": f"{self.share_base_url}/s/{record_id}"}

    def load(self, record_id: str) -> Dict[str, Any]:
        """
        Load a stored calculation.

        Raises:
            RecordValidationError: If the id is empty or too long
            RecordNotFoundError: If no record has this id
        """
        if not record_id or len(record_id) > MAX_ID_LENGTH:
            raise RecordValidationError("Invalid id")

        session = self.session_factory()
        try:
            record = session.get(SavedRecord, record_id)
            if record is None:
                raise RecordNotFoundError(f"Record not found: {record_id}")
            return {
                "input": record.input_json,
                "summary": record.summary_json,
                "label": record.label,
                "created_at": record.created_at.isoformat(),
            }
        except SQLAlchemyError as e:
            self.logger.error(f"Failed to load record {record_id}: {str(e)}")
            raise RecordError(f"Failed to load record: {e}") from e
        finally:
            session.close()

    def submit_feedback(self, content: Any, contact: Optional[str] = None) -> None:
        """
        Store user feedback, truncating overlong fields.

        Raises:
            RecordValidationError: If content is missing or not a string
        """
        if not content or not isinstance(content, str):
            raise RecordValidationError("Missing content")

        session = self.session_factory()
        try:
            session.add(
                Feedback(
                    content=content[:MAX_FEEDBACK_LENGTH],
                    contact=str(contact)[:MAX_CONTACT_LENGTH] if contact else None,
                )
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            self.logger.error(f"Failed to store feedback: {str(e)}")
            raise RecordError(f"Failed to submit feedback: {e}") from e
        finally:
            session.close()
