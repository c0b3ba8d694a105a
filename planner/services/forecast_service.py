"""
Forecast service for running net worth projections.

This service is the boundary in front of the projection engine. It looks up
stored scenarios, checks draft payloads for the minimum data a forecast needs,
assembles the ScenarioSnapshot and runs the engine. The engine itself never
sees missing scenarios or incomplete drafts.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from planner.database.models import Scenario as ScenarioRecord
from planner.models.forecast import ForecastResult
from planner.models.forecast_engine import project
from planner.models.scenario import (
    DEFAULT_FORECAST_SETTINGS,
    DraftScenario,
    ScenarioSnapshot,
)
from planner.models.time_grid import DEFAULT_START_YEAR, create_projection_grid

logger = logging.getLogger(__name__)

# Data groups a draft must carry before it can be forecast
REQUIRED_DRAFT_DATA = ("location", "assets", "incomeStreams")


class ForecastError(Exception):
    """Base exception for forecast requests that cannot be served."""


class ScenarioNotFoundError(ForecastError):
    """Raised when a requested scenario does not exist."""

    def __init__(self, scenario_id: str) -> None:
        self.scenario_id = scenario_id
        super().__init__(f"Scenario {scenario_id} not found")


class InsufficientDataError(ForecastError):
    """Raised when a draft lacks assets, income streams or a location."""

    def __init__(self, missing: List[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required data: {', '.join(self.missing)}")


def find_missing_draft_data(payload: Any) -> List[str]:
    """
    List the required data groups absent from a draft payload.

    Any truthy location counts as present.

    Args:
        payload: Decoded JSON body of a draft forecast request

    Returns:
        Names from REQUIRED_DRAFT_DATA that are missing, in that order
    """
    if not isinstance(payload, dict) or not payload:
        return list(REQUIRED_DRAFT_DATA)

    missing = []
    profile = payload.get("personalProfile")
    if not isinstance(profile, dict) or not profile.get("location"):
        missing.append("location")
    if not payload.get("assets"):
        missing.append("assets")
    if not payload.get("incomeStreams"):
        missing.append("incomeStreams")
    return missing


def build_snapshot_from_draft(payload: Any) -> ScenarioSnapshot:
    """
    Build a snapshot from an unsaved draft.

    Raises:
        InsufficientDataError: If location, assets or income streams are missing
        pydantic.ValidationError: If the draft data is malformed
    """
    missing = find_missing_draft_data(payload)
    if missing:
        raise InsufficientDataError(missing)
    return DraftScenario.model_validate(payload).to_snapshot()


def build_snapshot_from_record(record: ScenarioRecord) -> ScenarioSnapshot:
    """Build a snapshot from a stored scenario and its relations."""
    return ScenarioSnapshot(
        assets=[asset.to_model() for asset in record.assets],
        income_streams=[stream.to_model() for stream in record.income_streams],
        milestones=[milestone.to_model() for milestone in record.milestones],
        settings=(
            record.settings.to_model()
            if record.settings is not None
            else DEFAULT_FORECAST_SETTINGS
        ),
    )


def serialize_forecast(result: ForecastResult) -> Dict[str, Any]:
    """Serialize a forecast to its camelCase JSON structure."""
    return result.to_dict()


class ForecastService:
    """Service for producing forecasts for stored and draft scenarios."""

    def __init__(self, start_year: Optional[int] = None) -> None:
        """Initialize the forecast service.

        Args:
            start_year: Calendar year of the first projected year

        Raises:
            ValueError: If a 30-year horizon from start_year is out of range
        """
        self.start_year = start_year if start_year is not None else DEFAULT_START_YEAR
        create_projection_grid(self.start_year)
        self.logger = logging.getLogger(__name__)

    def forecast_scenario(self, db: Session, scenario_id: str) -> ForecastResult:
        """Forecast a stored scenario.

        Args:
            db: Database session
            scenario_id: ID of the scenario to forecast

        Returns:
            ForecastResult for the scenario

        Raises:
            ScenarioNotFoundError: If no scenario has this ID
        """
        record = (
            db.query(ScenarioRecord).filter(ScenarioRecord.id == scenario_id).first()
        )
        if record is None:
            self.logger.info(f"Forecast requested for unknown scenario {scenario_id}")
            raise ScenarioNotFoundError(scenario_id)

        return self._run(build_snapshot_from_record(record), f"scenario {scenario_id}")

    def forecast_draft(self, payload: Any) -> ForecastResult:
        """Forecast an unsaved draft scenario.

        Args:
            payload: Decoded JSON body with personalProfile, assets,
                incomeStreams, milestones and settings

        Returns:
            ForecastResult for the draft

        Raises:
            InsufficientDataError: If required data groups are missing
            pydantic.ValidationError: If the draft data is malformed
        """
        try:
            snapshot = build_snapshot_from_draft(payload)
        except InsufficientDataError as e:
            self.logger.info(f"Rejected draft forecast: {str(e)}")
            raise
        return self._run(snapshot, "draft scenario")

    def _run(self, snapshot: ScenarioSnapshot, label: str) -> ForecastResult:
        self.logger.info(
            f"Projecting {label}: {len(snapshot.assets)} assets, "
            f"{len(snapshot.income_streams)} income streams, "
            f"{len(snapshot.milestones)} milestones from {self.start_year}"
        )
        result = project(snapshot, snapshot.settings, start_year=self.start_year)
        self.logger.debug(
            f"Projected {label}: net worth {result.summary.starting_net_worth:.2f} "
            f"-> {result.summary.ending_net_worth:.2f}"
        )
        return result
