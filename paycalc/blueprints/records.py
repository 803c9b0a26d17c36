"""
Records blueprint for sharing calculations and collecting feedback.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from paycalc.services.record_service import (
    RecordError,
    RecordNotFoundError,
    RecordService,
    RecordValidationError,
)

records_bp = Blueprint("records", __name__, url_prefix="/api/v1")


def _service() -> RecordService:
    return RecordService(share_base_url=current_app.config["SHARE_BASE_URL"])


@records_bp.route("/save", methods=["POST"])
def save_record() -> Any:
    """Save a calculation and return its short id.

    Returns:
        JSON response with ``id`` and ``url``
    """
    data = request.get_json(silent=True) or {}
    try:
        saved = _service().save(data.get("input"), data.get("summary"), data.get("label"))
    except RecordValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RecordError as e:
        current_app.logger.error(f"Error saving record: {str(e)}")
        return jsonify({"error": "Failed to save"}), 500
    return jsonify(saved), 200


@records_bp.route("/save/<record_id>", methods=["GET"])
def load_record(record_id: str) -> Any:
    """Load a saved calculation by short id."""
    try:
        record = _service().load(record_id)
    except RecordNotFoundError:
        return jsonify({"error": "Not found"}), 404
    except RecordValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RecordError as e:
        current_app.logger.error(f"Error loading record {record_id}: {str(e)}")
        return jsonify({"error": "Failed to load"}), 500
    return jsonify(record), 200


@records_bp.route("/feedback", methods=["POST"])
def submit_feedback() -> Any:
    data = request.get_json(silent=True) or {}
    try:
        _service().submit_feedback(data.get("content"), data.get("contact"))
    except RecordValidationError as e:
        return jsonify({"error": str(e)}), 400
    except RecordError as e:
        current_app.logger.error(f"Error submitting feedback: {str(e)}")
        return jsonify({"error": "Failed to submit"}), 500
    return jsonify({"ok": True}), 200
