"""
Calculator blueprint.

Thin JSON endpoints over the calculation engine: bodies are parsed into the
engine's pydantic models and results dumped back. No arithmetic lives here.
"""

import json
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from paycalc.models import (
    InputValidationError,
    ReconciliationInput,
    SalaryInput,
    SalaryStructure,
    SalaryStructureTemplate,
    UnknownCityError,
    calc_structure_breakdown,
    calculate_all,
    compare_cities,
    compare_offers,
    convert_salary_structure,
    list_city_policies,
    reconcile_annual_tax,
)

calculator_bp = Blueprint("calculator", __name__, url_prefix="/api/v1")


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@calculator_bp.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError) -> Any:
    details = json.loads(e.json(include_url=False, include_input=False))
    return jsonify({"error": "Invalid input", "details": details}), 400


@calculator_bp.errorhandler(UnknownCityError)
@calculator_bp.errorhandler(InputValidationError)
def handle_input_error(e: Exception) -> Any:
    return jsonify({"error": str(e)}), 400


@calculator_bp.errorhandler(Exception)
def handle_unexpected_error(e: Exception) -> Any:
    if isinstance(e, HTTPException):
        return e
    current_app.logger.error(f"Calculation failed: {str(e)}")
    return jsonify({"error": "Internal server error"}), 500


@calculator_bp.route("/cities", methods=["GET"])
def list_cities() -> Any:
    """List every supported city's policy."""
    return jsonify([p.model_dump(mode="json") for p in list_city_policies()]), 200


@calculator_bp.route("/calculate", methods=["POST"])
def calculate() -> Any:
    """Annual summary for a salary package.

    Returns:
        JSON ``AnnualSummary``
    """
    data = _body()
    data.setdefault("city", current_app.config["DEFAULT_CITY"])
    summary = calculate_all(SalaryInput.model_validate(data))
    return jsonify(summary.model_dump(mode="json")), 200


@calculator_bp.route("/structure", methods=["POST"])
def structure_breakdown() -> Any:
    breakdown = calc_structure_breakdown(SalaryStructure.model_validate(_body()))
    return jsonify(breakdown.model_dump(mode="json")), 200


@calculator_bp.route("/convert", methods=["POST"])
def convert() -> Any:
    """Convert a current structure into a target structure.

    Expects ``{"current": {...}, "target": {...}, "raise_percent": 20}``; any
    ``monthly_base`` on the target is ignored.
    """
    data = _body()
    current = SalaryStructure.model_validate(data.get("current") or {})
    target = SalaryStructureTemplate.model_validate(data.get("target") or {})
    raise_percent = data.get("raise_percent", 0)
    if isinstance(raise_percent, bool) or not isinstance(raise_percent, (int, float)):
        return jsonify({"error": "raise_percent must be a number"}), 400

    result = convert_salary_structure(current, target, float(raise_percent))
    return jsonify(result.model_dump(mode="json")), 200


@calculator_bp.route("/compare/cities", methods=["POST"])
def compare_city_packages() -> Any:
    """Compare one package across cities: ``{"input": {...}, "cities": [...]}``."""
    data = _body()
    salary_input = SalaryInput.model_validate(data.get("input") or {})
    cities = data.get("cities")
    if not isinstance(cities, list):
        return jsonify({"error": "cities must be a list"}), 400

    comparison = compare_cities(salary_input, cities)
    return jsonify(comparison.model_dump(mode="json")), 200


@calculator_bp.route("/compare/offers", methods=["POST"])
def compare_structure_offers() -> Any:
    """Rank offers by comprehensive value: ``{"offers": [...]}``."""
    offers = _body().get("offers")
    if not isinstance(offers, list):
        return jsonify({"error": "offers must be a list"}), 400

    comparison = compare_offers([SalaryStructure.model_validate(o) for o in offers])
    return jsonify(comparison.model_dump(mode="json")), 200


@calculator_bp.route("/reconcile", methods=["POST"])
def reconcile() -> Any:
    result = reconcile_annual_tax(ReconciliationInput.model_validate(_body()))
    return jsonify(result.model_dump(mode="json")), 200
