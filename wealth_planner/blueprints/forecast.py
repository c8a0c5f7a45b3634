"""
Forecast blueprint for projections, tax estimates, debt plans and Monte Carlo runs.

All endpoints accept and return JSON. Request bodies are validated with
pydantic; validation failures are reported as 400 responses.
"""

import json
from typing import Any, List, Literal

from flask import Blueprint, current_app, jsonify, request
from pydantic import Field, ValidationError

from wealth_planner.models.entities import (
    Amount,
    Debt,
    EntityModel,
    IncomeType,
    ScenarioData,
)
from wealth_planner.models.monte_carlo import MonteCarloParams
from wealth_planner.services.forecast_service import ForecastError, ForecastService

forecast_bp = Blueprint("forecast", __name__, url_prefix="/api")


class TaxRequest(EntityModel):
    income: Amount = Field(default=0.0)
    income_type: IncomeType = Field(default=IncomeType.SALARY)
    state: str = Field(default="")
    filing_status: str = Field(default="")


class DebtCompareRequest(EntityModel):
    debts: List[Debt] = Field(default_factory=list)
    extra_payment: Amount = Field(default=0.0)


class DebtPlanRequest(DebtCompareRequest):
    strategy: Literal["snowball", "avalanche"] = Field(default="avalanche")


def get_forecast_service() -> ForecastService:
    return current_app.extensions["forecast_service"]


def validation_error_response(error: ValidationError) -> Any:
    details = json.loads(error.json(include_url=False))
    return jsonify({"error": "Invalid request", "details": details}), 400


def apply_defaults(payload: dict) -> dict:
    """Fill in configured state/filing status when the request omits them."""
    payload = dict(payload)
    if not payload.get("state"):
        payload["state"] = current_app.config["DEFAULT_STATE"]
    if not payload.get("filing_status") and not payload.get("filingStatus"):
        payload["filing_status"] = current_app.config["DEFAULT_FILING_STATUS"]
    return payload


@forecast_bp.route("/projection", methods=["POST"])
def run_projection() -> Any:
    """Project a scenario's inputs year by year.

    Returns:
        JSON response with the list of yearly projections
    """
    try:
        payload = apply_defaults(request.get_json(silent=True) or {})
        if "projection_years" not in payload and "projectionYears" not in payload:
            payload["projection_years"] = current_app.config[
                "DEFAULT_PROJECTION_YEARS"
            ]
        inputs = ScenarioData.model_validate(payload)
        projections = get_forecast_service().run_projection(inputs)
        return (
            jsonify({"projections": [p.model_dump(mode="json") for p in projections]}),
            200,
        )

    except ValidationError as e:
        return validation_error_response(e)
    except ForecastError as e:
        current_app.logger.error(f"Error running projection: {str(e)}")
        return jsonify({"error": "Projection failed", "message": str(e)}), 500


@forecast_bp.route("/tax", methods=["POST"])
def estimate_tax() -> Any:
    """Estimate federal and state tax on a single income amount."""
    try:
        tax_request = TaxRequest.model_validate(
            apply_defaults(request.get_json(silent=True) or {})
        )
        summary = get_forecast_service().run_tax(
            tax_request.income,
            tax_request.income_type,
            tax_request.state,
            tax_request.filing_status,
        )
        summary["income_type"] = tax_request.income_type.value
        return jsonify(summary), 200

    except ValidationError as e:
        return validation_error_response(e)


@forecast_bp.route("/debts/plan", methods=["POST"])
def plan_debt_payoff() -> Any:
    """Simulate paying off debts with one strategy."""
    try:
        plan_request = DebtPlanRequest.model_validate(request.get_json(silent=True) or {})
        plan = get_forecast_service().run_payoff_plan(
            plan_request.debts, plan_request.extra_payment, plan_request.strategy
        )
        return jsonify(plan.model_dump(mode="json")), 200

    except ValidationError as e:
        return validation_error_response(e)


@forecast_bp.route("/debts/compare", methods=["POST"])
def compare_debt_strategies() -> Any:
    """Compare snowball and avalanche payoff of the same debts."""
    try:
        compare_request = DebtCompareRequest.model_validate(
            request.get_json(silent=True) or {}
        )
        comparison = get_forecast_service().run_strategy_comparison(
            compare_request.debts, compare_request.extra_payment
        )
        return jsonify(comparison.model_dump(mode="json")), 200

    except ValidationError as e:
        return validation_error_response(e)


@forecast_bp.route("/monte-carlo", methods=["POST"])
def run_monte_carlo() -> Any:
    """Run a Monte Carlo wealth simulation."""
    try:
        params = MonteCarloParams.model_validate(request.get_json(silent=True) or {})
        result = get_forecast_service().run_monte_carlo(params)
        return jsonify(result.model_dump(mode="json")), 200

    except ValidationError as e:
        return validation_error_response(e)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except ForecastError as e:
        current_app.logger.error(f"Error running Monte Carlo: {str(e)}")
        return jsonify({"error": "Simulation failed", "message": str(e)}), 500
