"""Milestone blueprint for managing the one-time events of a scenario."""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from planner.blueprints.scenarios import next_position, validation_error_response
from planner.database.base import get_session
from planner.database.models import Milestone, Scenario
from planner.models.scenario import Milestone as MilestoneModel

milestones_bp = Blueprint("milestones", __name__, url_prefix="/api/milestones")


@milestones_bp.route("", methods=["POST"])
def create_milestone() -> Any:
    """Add a milestone to a scenario.

    Returns:
        JSON response with the created milestone
    """
    try:
        data = request.get_json(silent=True) or {}
        milestone_model = MilestoneModel.model_validate(data)

        with get_session() as db:
            scenario = (
                db.query(Scenario).filter(Scenario.id == data.get("scenarioId")).first()
            )
            if not scenario:
                return jsonify({"error": "Scenario not found"}), 404

            milestone = Milestone(
                scenario_id=scenario.id,
                position=next_position(db, Milestone, scenario.id),
            )
            milestone.apply(milestone_model)
            db.add(milestone)
            db.commit()
            db.refresh(milestone)

            return jsonify(milestone.to_dict()), 201

    except ValidationError as e:
        return validation_error_response(e)

    except Exception as e:
        current_app.logger.error(f"Error creating milestone: {str(e)}")
        return jsonify({"error": "Failed to create milestone"}), 500


@milestones_bp.route("/scenario/<scenario_id>", methods=["GET"])
def list_scenario_milestones(scenario_id: str) -> Any:
    """List a scenario's milestones in their stored order.

    Args:
        scenario_id: ID of the scenario
    """
    try:
        with get_session() as db:
            milestones = (
                db.query(Milestone)
                .filter(Milestone.scenario_id == scenario_id)
                .order_by(Milestone.position)
                .all()
            )
            return jsonify([milestone.to_dict() for milestone in milestones]), 200

    except Exception as e:
        current_app.logger.error(f"Error fetching milestones: {str(e)}")
        return jsonify({"error": "Failed to fetch milestones"}), 500


@milestones_bp.route("/<milestone_id>", methods=["PUT"])
def update_milestone(milestone_id: str) -> Any:
    """Update a milestone; omitted fields keep their stored values.

    Args:
        milestone_id: ID of the milestone
    """
    try:
        data = request.get_json(silent=True) or {}
        with get_session() as db:
            milestone = db.query(Milestone).filter(Milestone.id == milestone_id).first()
            if not milestone:
                return jsonify({"error": "Milestone not found"}), 404

            merged = {**milestone.to_dict(), **data}
            milestone.apply(MilestoneModel.model_validate(merged))
            db.commit()
            db.refresh(milestone)

            return jsonify(milestone.to_dict()), 200

    except ValidationError as e:
        return validation_error_response(e)

    except Exception as e:
        current_app.logger.error(f"Error updating milestone: {str(e)}")
        return jsonify({"error": "Failed to update milestone"}), 500


@milestones_bp.route("/<milestone_id>", methods=["DELETE"])
def delete_milestone(milestone_id: str) -> Any:
    """Delete a milestone.

    Args:
        milestone_id: ID of the milestone
    """
    try:
        with get_session() as db:
            milestone = db.query(Milestone).filter(Milestone.id == milestone_id).first()
            if not milestone:
                return jsonify({"error": "Milestone not found"}), 404

            db.delete(milestone)
            db.commit()

        return "", 204

    except Exception as e:
        current_app.logger.error(f"Error deleting milestone: {str(e)}")
        return jsonify({"error": "Failed to delete milestone"}), 500
