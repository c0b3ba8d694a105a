"""
Scenario blueprint for creating, reading, updating and deleting scenarios.

A scenario can be created together with its assets, income streams,
milestones and settings in a single request.
"""

import json
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session

from planner.database.base import get_session
from planner.database.models import (
    Asset,
    IncomeStream,
    Milestone,
    Scenario,
    ScenarioSettings,
)
from planner.models.scenario import (
    Asset as AssetModel,
    ForecastSettings,
    IncomeFrequency,
    IncomeStream as IncomeStreamModel,
    Milestone as MilestoneModel,
    PersonalProfile,
)

scenarios_bp = Blueprint("scenarios", __name__, url_prefix="/api/scenarios")

# Frequencies that may be stored; the engine itself tolerates any value
STORABLE_FREQUENCIES = {frequency.value for frequency in IncomeFrequency}


class UnknownFrequencyError(ValueError):
    """Raised when an income stream to be stored has an unknown frequency."""


def validation_error_response(e: ValidationError) -> Any:
    """Build the 400 response for a pydantic validation error."""
    return jsonify({"error": "Invalid data", "details": json.loads(e.json())}), 400


def next_position(db: Session, model: Any, scenario_id: str) -> int:
    """Position after the last stored row of a scenario, or 0 if there is none."""
    last = (
        db.query(func.max(model.position))
        .filter(model.scenario_id == scenario_id)
        .scalar()
    )
    return 0 if last is None else last + 1


def validate_income_stream(item: Dict[str, Any]) -> IncomeStreamModel:
    """Validate an income stream payload for storage."""
    stream = IncomeStreamModel.model_validate(item)
    if stream.frequency not in STORABLE_FREQUENCIES:
        raise UnknownFrequencyError(f"Unknown income frequency: {stream.frequency}")
    return stream


def _apply_profile(scenario: Scenario, data: Dict[str, Any]) -> None:
    if "personalProfile" in data:
        profile = PersonalProfile.model_validate(data["personalProfile"] or {})
        scenario.age = profile.age  # type: ignore
        scenario.location = profile.location  # type: ignore


def _apply_settings(scenario: Scenario, data: Dict[str, Any]) -> None:
    if data.get("settings") is None:
        return
    settings = ForecastSettings.model_validate(data["settings"])
    if scenario.settings is None:
        scenario.settings = ScenarioSettings()
    scenario.settings.apply(settings)


@scenarios_bp.route("", methods=["POST"])
def create_scenario() -> Any:
    """Create a new scenario, optionally with its relations.

    Returns:
        JSON response with the created scenario
    """
    try:
        data = request.get_json(silent=True) or {}
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            return jsonify({"error": "name is required"}), 400

        scenario = Scenario(
            name=name,
            description=data.get("description"),
            user_id=data.get("userId"),
        )
        _apply_profile(scenario, data)
        _apply_settings(scenario, data)

        for position, item in enumerate(data.get("assets") or []):
            asset = Asset(position=position)
            asset.apply(AssetModel.model_validate(item))
            scenario.assets.append(asset)

        for position, item in enumerate(data.get("incomeStreams") or []):
            stream = IncomeStream(position=position)
            stream.apply(validate_income_stream(item))
            scenario.income_streams.append(stream)

        for position, item in enumerate(data.get("milestones") or []):
            milestone = Milestone(position=position)
            milestone.apply(MilestoneModel.model_validate(item))
            scenario.milestones.append(milestone)

        with get_session() as db:
            db.add(scenario)
            db.commit()
            db.refresh(scenario)
            response_data = scenario.to_dict(include_relations=True)

        return jsonify(response_data), 201

    except ValidationError as e:
        return validation_error_response(e)

    except UnknownFrequencyError as e:
        return jsonify({"error": str(e)}), 400

    except Exception as e:
        current_app.logger.error(f"Error creating scenario: {str(e)}")
        return jsonify({"error": "Failed to create scenario"}), 500


@scenarios_bp.route("/<scenario_id>", methods=["GET"])
def get_scenario(scenario_id: str) -> Any:
    """Get a scenario with all of its relations.

    Args:
        scenario_id: ID of the scenario

    Returns:
        JSON response with the scenario
    """
    try:
        with get_session() as db:
            scenario = db.query(Scenario).filter(Scenario.id == scenario_id).first()

            if not scenario:
                return jsonify({"error": "Scenario not found"}), 404

            return jsonify(scenario.to_dict(include_relations=True)), 200

    except Exception as e:
        current_app.logger.error(f"Error fetching scenario: {str(e)}")
        return jsonify({"error": "Failed to fetch scenario"}), 500


@scenarios_bp.route("/<scenario_id>", methods=["PUT"])
def update_scenario(scenario_id: str) -> Any:
    """Update a scenario's details, profile and settings.

    Args:
        scenario_id: ID of the scenario

    Returns:
        JSON response with the updated scenario
    """
    try:
        data = request.get_json(silent=True) or {}
        with get_session() as db:
            scenario = db.query(Scenario).filter(Scenario.id == scenario_id).first()

            if not scenario:
                return jsonify({"error": "Scenario not found"}), 404

            if "name" in data:
                if not isinstance(data["name"], str) or not data["name"].strip():
                    return jsonify({"error": "name must not be empty"}), 400
                scenario.name = data["name"]  # type: ignore
            if "description" in data:
                scenario.description = data["description"]  # type: ignore
            if "userId" in data:
                scenario.user_id = data["userId"]  # type: ignore
            _apply_profile(scenario, data)
            _apply_settings(scenario, data)

            db.commit()
            db.refresh(scenario)

            return jsonify(scenario.to_dict(include_relations=True)), 200

    except ValidationError as e:
        return validation_error_response(e)

    except Exception as e:
        current_app.logger.error(f"Error updating scenario: {str(e)}")
        return jsonify({"error": "Failed to update scenario"}), 500


@scenarios_bp.route("/<scenario_id>", methods=["DELETE"])
def delete_scenario(scenario_id: str) -> Any:
    """Delete a scenario and everything that belongs to it.

    Args:
        scenario_id: ID of the scenario

    Returns:
        Empty 204 response
    """
    try:
        with get_session() as db:
            scenario = db.query(Scenario).filter(Scenario.id == scenario_id).first()

            if not scenario:
                return jsonify({"error": "Scenario not found"}), 404

            db.delete(scenario)
            db.commit()

        return "", 204

    except Exception as e:
        current_app.logger.error(f"Error deleting scenario: {str(e)}")
        return jsonify({"error": "Failed to delete scenario"}), 500
