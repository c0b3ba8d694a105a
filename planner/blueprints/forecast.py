"""
Forecast blueprint for net worth projections.

This module provides API endpoints that project a stored scenario or an
unsaved draft scenario over the forecast horizon.
"""

import json
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from planner.database.base import get_session
from planner.services.forecast_service import (
    ForecastService,
    InsufficientDataError,
    ScenarioNotFoundError,
    serialize_forecast,
)

forecast_bp = Blueprint("forecast", __name__, url_prefix="/api/forecast")


def _get_service() -> ForecastService:
    return ForecastService(start_year=current_app.config["FORECAST_START_YEAR"])


@forecast_bp.route("/draft", methods=["POST"])
def forecast_draft() -> Any:
    """Generate a forecast for draft scenario data that is not saved.

    Returns:
        JSON response with timeline and summary
    """
    try:
        data = request.get_json(silent=True)
        result = _get_service().forecast_draft(data)
        return jsonify(serialize_forecast(result)), 200

    except InsufficientDataError as e:
        return (
            jsonify(
                {
                    "error": "Missing required data: location, assets, and income streams are required",
                    "missing": e.missing,
                }
            ),
            400,
        )

    except ValidationError as e:
        return (
            jsonify(
                {"error": "Invalid draft scenario data", "details": json.loads(e.json())}
            ),
            400,
        )

    except Exception as e:
        current_app.logger.error(f"Error generating draft forecast: {str(e)}")
        return jsonify({"error": "Failed to generate draft forecast"}), 500


@forecast_bp.route("/<scenario_id>", methods=["POST"])
def forecast_scenario(scenario_id: str) -> Any:
    """Generate a forecast for a stored scenario.

    Args:
        scenario_id: ID of the scenario to forecast

    Returns:
        JSON response with timeline and summary
    """
    try:
        with get_session() as db:
            result = _get_service().forecast_scenario(db, scenario_id)
        return jsonify(serialize_forecast(result)), 200

    except ScenarioNotFoundError:
        return jsonify({"error": "Scenario not found"}), 404

    except Exception as e:
        current_app.logger.error(f"Error generating forecast: {str(e)}")
        return jsonify({"error": "Failed to generate forecast"}), 500
