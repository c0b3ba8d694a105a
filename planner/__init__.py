"""Net Worth Planner Flask Application Factory."""

from typing import Optional

from flask import Flask

from planner.config import get_global_settings


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production);
            defaults to APP_ENV

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    app_env = config_name or settings.app_env
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["DATABASE_URL"] = settings.db_url
    app.config["ENV"] = settings.flask_env
    app.config["DEBUG"] = app_env == "development"
    app.config["TESTING"] = app_env == "testing"
    app.config["FORECAST_START_YEAR"] = settings.forecast_start_year

    app.logger.setLevel(settings.log_level)

    # Register blueprints
    from planner.blueprints.assets import assets_bp
    from planner.blueprints.forecast import forecast_bp
    from planner.blueprints.health import health_bp
    from planner.blueprints.income_streams import income_streams_bp
    from planner.blueprints.milestones import milestones_bp
    from planner.blueprints.scenarios import scenarios_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(scenarios_bp)
    app.register_blueprint(assets_bp)
    app.register_blueprint(income_streams_bp)
    app.register_blueprint(milestones_bp)
    app.register_blueprint(forecast_bp)

    return app
