"""Income stream blueprint for managing the income of a scenario."""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from planner.blueprints.scenarios import (
    UnknownFrequencyError,
    next_position,
    validate_income_stream,
    validation_error_response,
)
from planner.database.base import get_session
from planner.database.models import IncomeStream, Scenario

income_streams_bp = Blueprint(
    "income_streams", __name__, url_prefix="/api/income-streams"
)


@income_streams_bp.route("", methods=["POST"])
def create_income_stream() -> Any:
    """Add an income stream to a scenario.

    Returns:
        JSON response with the created income stream
    """
    try:
        data = request.get_json(silent=True) or {}
        stream_model = validate_income_stream(data)

        with get_session() as db:
            scenario = (
                db.query(Scenario).filter(Scenario.id == data.get("scenarioId")).first()
            )
            if not scenario:
                return jsonify({"error": "Scenario not found"}), 404

            stream = IncomeStream(
                scenario_id=scenario.id,
                position=next_position(db, IncomeStream, scenario.id),
            )
            stream.apply(stream_model)
            db.add(stream)
            db.commit()
            db.refresh(stream)

            return jsonify(stream.to_dict()), 201

    except ValidationError as e:
        return validation_error_response(e)

    except UnknownFrequencyError as e:
        return jsonify({"error": str(e)}), 400

    except Exception as e:
        current_app.logger.error(f"Error creating income stream: {str(e)}")
        return jsonify({"error": "Failed to create income stream"}), 500


@income_streams_bp.route("/scenario/<scenario_id>", methods=["GET"])
def list_scenario_income_streams(scenario_id: str) -> Any:
    """List a scenario's income streams in their stored order.

    Args:
        scenario_id: ID of the scenario
    """
    try:
        with get_session() as db:
            streams = (
                db.query(IncomeStream)
                .filter(IncomeStream.scenario_id == scenario_id)
                .order_by(IncomeStream.position)
                .all()
            )
            return jsonify([stream.to_dict() for stream in streams]), 200

    except Exception as e:
        current_app.logger.error(f"Error fetching income streams: {str(e)}")
        return jsonify({"error": "Failed to fetch income streams"}), 500


@income_streams_bp.route("/<stream_id>", methods=["PUT"])
def update_income_stream(stream_id: str) -> Any:
    """Update an income stream; omitted fields keep their stored values.

    Args:
        stream_id: ID of the income stream
    """
    try:
        data = request.get_json(silent=True) or {}
        with get_session() as db:
            stream = db.query(IncomeStream).filter(IncomeStream.id == stream_id).first()
            if not stream:
                return jsonify({"error": "Income stream not found"}), 404

            stream.apply(validate_income_stream({**stream.to_dict(), **data}))
            db.commit()
            db.refresh(stream)

            return jsonify(stream.to_dict()), 200

    except ValidationError as e:
        return validation_error_response(e)

    except UnknownFrequencyError as e:
        return jsonify({"error": str(e)}), 400

    except Exception as e:
        current_app.logger.error(f"Error updating income stream: {str(e)}")
        return jsonify({"error": "Failed to update income stream"}), 500


@income_streams_bp.route("/<stream_id>", methods=["DELETE"])
def delete_income_stream(stream_id: str) -> Any:
    """Delete an income stream.

    Args:
        stream_id: ID of the income stream
    """
    try:
        with get_session() as db:
            stream = db.query(IncomeStream).filter(IncomeStream.id == stream_id).first()
            if not stream:
                return jsonify({"error": "Income stream not found"}), 404

            db.delete(stream)
            db.commit()

        return "", 204

    except Exception as e:
        current_app.logger.error(f"Error deleting income stream: {str(e)}")
        return jsonify({"error": "Failed to delete income stream"}), 500
