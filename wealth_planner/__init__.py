"""Wealth Planner Flask Application Factory."""

import atexit
import logging
from typing import Optional

from flask import Flask

from wealth_planner.config import get_global_settings


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production)

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = config_name or settings.flask_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["DEFAULT_STATE"] = settings.default_state
    app.config["DEFAULT_FILING_STATUS"] = settings.default_filing_status
    app.config["DEFAULT_PROJECTION_YEARS"] = settings.default_projection_years

    logging.basicConfig(level=settings.log_level)
    app.logger.setLevel(settings.log_level)

    # Services are created per app so separate apps never share state
    from wealth_planner.models.monte_carlo import MonteCarloProjector
    from wealth_planner.models.scenario import ScenarioService
    from wealth_planner.services.forecast_service import ForecastService

    monte_carlo = MonteCarloProjector(max_workers=settings.monte_carlo_workers)
    atexit.register(monte_carlo.shutdown)
    app.extensions["forecast_service"] = ForecastService(
        monte_carlo=monte_carlo,
        max_simulations=settings.monte_carlo_max_simulations,
    )
    app.extensions["scenario_service"] = ScenarioService()

    # Register blueprints
    from wealth_planner.blueprints.forecast import forecast_bp
    from wealth_planner.blueprints.health import health_bp
    from wealth_planner.blueprints.scenarios import scenarios_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(forecast_bp)
    app.register_blueprint(scenarios_bp)

    return app
