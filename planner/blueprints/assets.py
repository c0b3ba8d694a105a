"""Asset blueprint for managing the assets of a scenario."""

from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from planner.blueprints.scenarios import next_position, validation_error_response
from planner.database.base import get_session
from planner.database.models import Asset, Scenario
from planner.models.scenario import Asset as AssetModel

assets_bp = Blueprint("assets", __name__, url_prefix="/api/assets")


@assets_bp.route("", methods=["POST"])
def create_asset() -> Any:
    """Add an asset to a scenario.

    Returns:
        JSON response with the created asset
    """
    try:
        data = request.get_json(silent=True) or {}
        asset_model = AssetModel.model_validate(data)

        with get_session() as db:
            scenario = (
                db.query(Scenario).filter(Scenario.id == data.get("scenarioId")).first()
            )
            if not scenario:
                return jsonify({"error": "Scenario not found"}), 404

            asset = Asset(
                scenario_id=scenario.id,
                position=next_position(db, Asset, scenario.id),
            )
            asset.apply(asset_model)
            db.add(asset)
            db.commit()
            db.refresh(asset)

            return jsonify(asset.to_dict()), 201

    except ValidationError as e:
        return validation_error_response(e)

    except Exception as e:
        current_app.logger.error(f"Error creating asset: {str(e)}")
        return jsonify({"error": "Failed to create asset"}), 500


@assets_bp.route("/scenario/<scenario_id>", methods=["GET"])
def list_scenario_assets(scenario_id: str) -> Any:
    """List a scenario's assets in their stored order.

    Args:
        scenario_id: ID of the scenario
    """
    try:
        with get_session() as db:
            assets = (
                db.query(Asset)
                .filter(Asset.scenario_id == scenario_id)
                .order_by(Asset.position)
                .all()
            )
            return jsonify([asset.to_dict() for asset in assets]), 200

    except Exception as e:
        current_app.logger.error(f"Error fetching assets: {str(e)}")
        return jsonify({"error": "Failed to fetch assets"}), 500


@assets_bp.route("/<asset_id>", methods=["PUT"])
def update_asset(asset_id: str) -> Any:
    """Update an asset; omitted fields keep their stored values.

    Args:
        asset_id: ID of the asset
    """
    try:
        data = request.get_json(silent=True) or {}
        with get_session() as db:
            asset = db.query(Asset).filter(Asset.id == asset_id).first()
            if not asset:
                return jsonify({"error": "Asset not found"}), 404

            asset.apply(AssetModel.model_validate({**asset.to_dict(), **data}))
            db.commit()
            db.refresh(asset)

            return jsonify(asset.to_dict()), 200

    except ValidationError as e:
        return validation_error_response(e)

    except Exception as e:
        current_app.logger.error(f"Error updating asset: {str(e)}")
        return jsonify({"error": "Failed to update asset"}), 500


@assets_bp.route("/<asset_id>", methods=["DELETE"])
def delete_asset(asset_id: str) -> Any:
    """Delete an asset.

    Args:
        asset_id: ID of the asset
    """
    try:
        with get_session() as db:
            asset = db.query(Asset).filter(Asset.id == asset_id).first()
            if not asset:
                return jsonify({"error": "Asset not found"}), 404

            db.delete(asset)
            db.commit()

        return "", 204

    except Exception as e:
        current_app.logger.error(f"Error deleting asset: {str(e)}")
        return jsonify({"error": "Failed to delete asset"}), 500
