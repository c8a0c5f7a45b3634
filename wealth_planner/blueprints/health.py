"""Health check blueprint."""

from flask import Blueprint, Response, current_app, jsonify

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with status and the registered forecast services
    """
    services = sorted(
        name
        for name in ("forecast_service", "scenario_service")
        if name in current_app.extensions
    )
    return jsonify({"status": "ok", "services": services})
