"""Health check blueprint."""

import time

from flask import Blueprint, Response, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with status information
    """
    return jsonify({"status": "ok"})


@health_bp.route("/api/v1/health")
def api_health() -> Response:
    return jsonify({"ok": True, "ts": int(time.time() * 1000)})
