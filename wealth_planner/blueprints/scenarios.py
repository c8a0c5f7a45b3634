"""
Scenario blueprint for creating, editing, switching and comparing scenarios.
"""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from wealth_planner.blueprints.forecast import (
    get_forecast_service,
    validation_error_response,
)
from wealth_planner.models.scenario import Scenario, ScenarioService
from wealth_planner.services.forecast_service import ForecastError

scenarios_bp = Blueprint("scenarios", __name__, url_prefix="/api/scenarios")


def get_scenario_service() -> ScenarioService:
    return current_app.extensions["scenario_service"]


def scenario_summary(scenario: Scenario, current_id: str) -> dict:
    return {
        "id": scenario.id,
        "name": scenario.name,
        "is_default": scenario.is_default,
        "is_current": scenario.id == current_id,
        "created_at": scenario.created_at.isoformat(),
    }


@scenarios_bp.route("", methods=["GET"])
def list_scenarios() -> Any:
    """List all scenarios."""
    service = get_scenario_service()
    current_id = service.current_scenario_id
    return (
        jsonify(
            {
                "current_scenario_id": current_id,
                "scenarios": [
                    scenario_summary(s, current_id) for s in service.get_all_scenarios()
                ],
            }
        ),
        200,
    )


@scenarios_bp.route("", methods=["POST"])
def create_scenario() -> Any:
    """Create a scenario branched from an existing one.

    Returns:
        JSON response with the new scenario
    """
    data = request.get_json(silent=True) or {}
    name = data.get("name")
    if not name:
        return jsonify({"error": "name is required"}), 400

    service = get_scenario_service()
    scenario_id = service.create_scenario(name, data.get("base_scenario_id"))
    scenario = service.get_scenario(scenario_id)
    return jsonify(scenario.model_dump(mode="json")), 201


@scenarios_bp.route("/compare", methods=["GET"])
def compare_scenarios() -> Any:
    """Compare the inputs of two scenarios."""
    first = request.args.get("a")
    second = request.args.get("b")
    if not first or not second:
        return jsonify({"error": "query parameters a and b are required"}), 400

    try:
        return jsonify(get_scenario_service().compare_scenarios(first, second)), 200
    except KeyError:
        return jsonify({"error": "Scenario not found"}), 404


@scenarios_bp.route("/<scenario_id>", methods=["GET"])
def get_scenario(scenario_id: str) -> Any:
    scenario = get_scenario_service().get_scenario(scenario_id)
    if scenario is None:
        return jsonify({"error": "Scenario not found"}), 404
    return jsonify(scenario.model_dump(mode="json")), 200


@scenarios_bp.route("/<scenario_id>", methods=["PATCH"])
def update_scenario(scenario_id: str) -> Any:
    """Merge partial inputs into a scenario."""
    service = get_scenario_service()
    if service.get_scenario(scenario_id) is None:
        return jsonify({"error": "Scenario not found"}), 404

    try:
        service.update_scenario(scenario_id, request.get_json(silent=True) or {})
    except ValidationError as e:
        return validation_error_response(e)

    return jsonify(service.get_scenario(scenario_id).model_dump(mode="json")), 200


@scenarios_bp.route("/<scenario_id>", methods=["DELETE"])
def delete_scenario(scenario_id: str) -> Any:
    service = get_scenario_service()
    scenario = service.get_scenario(scenario_id)
    if scenario is None:
        return jsonify({"error": "Scenario not found"}), 404
    if not service.delete_scenario(scenario_id):
        return jsonify({"error": "Default scenario cannot be deleted"}), 400
    return jsonify({"deleted": scenario_id}), 200


@scenarios_bp.route("/<scenario_id>/activate", methods=["POST"])
def activate_scenario(scenario_id: str) -> Any:
    service = get_scenario_service()
    if service.get_scenario(scenario_id) is None:
        return jsonify({"error": "Scenario not found"}), 404
    service.set_current_scenario(scenario_id)
    return jsonify({"current_scenario_id": service.current_scenario_id}), 200


@scenarios_bp.route("/<scenario_id>/projection", methods=["GET"])
def project_scenario(scenario_id: str) -> Any:
    """Run the projection for a stored scenario."""
    scenario = get_scenario_service().get_scenario(scenario_id)
    if scenario is None:
        return jsonify({"error": "Scenario not found"}), 404

    try:
        projections = get_forecast_service().run_projection(scenario.data)
        return (
            jsonify(
                {
                    "scenario_id": scenario_id,
                    "projections": [p.model_dump(mode="json") for p in projections],
                }
            ),
            200,
        )

    except ForecastError as e:
        current_app.logger.error(
            f"Error projecting scenario {scenario_id}: {str(e)}"
        )
        return jsonify({"error": "Projection failed", "message": str(e)}), 500
