"""Tests for the forecast service boundary."""

import datetime as dt

import pytest
from pydantic import ValidationError

from planner.database.models import Asset, IncomeStream, Milestone, Scenario, ScenarioSettings
from planner.models.scenario import DEFAULT_FORECAST_SETTINGS
from planner.services.forecast_service import (
    ForecastService,
    InsufficientDataError,
    ScenarioNotFoundError,
    build_snapshot_from_draft,
    build_snapshot_from_record,
    find_missing_draft_data,
    serialize_forecast,
)


class TestFindMissingDraftData:
    """Test draft completeness checks."""

    def test_complete_draft(self, draft_payload):
        """Test that a complete draft has nothing missing."""
        assert find_missing_draft_data(draft_payload) == []

    @pytest.mark.parametrize("payload", [None, {}, [], "draft"])
    def test_empty_or_malformed_payload(self, payload):
        """Test that empty payloads are missing everything."""
        assert find_missing_draft_data(payload) == ["location", "assets", "incomeStreams"]

    def test_missing_income_streams(self, draft_payload):
        """Test a draft with no income streams."""
        draft_payload["incomeStreams"] = []
        assert find_missing_draft_data(draft_payload) == ["incomeStreams"]

    @pytest.mark.parametrize("location", ["   ", 42, {"city": "Austin"}])
    def test_any_truthy_location_is_present(self, draft_payload, location):
        """Test that any non-empty location value is accepted."""
        draft_payload["personalProfile"]["location"] = location
        assert find_missing_draft_data(draft_payload) == []

    @pytest.mark.parametrize("location", ["", None, 0])
    def test_falsy_location_is_missing(self, draft_payload, location):
        """Test that empty location values count as missing."""
        draft_payload["personalProfile"]["location"] = location
        del draft_payload["assets"]
        assert find_missing_draft_data(draft_payload) == ["location", "assets"]

    def test_missing_profile(self, draft_payload):
        """Test a draft without a personal profile."""
        del draft_payload["personalProfile"]
        assert find_missing_draft_data(draft_payload) == ["location"]


class TestBuildSnapshots:
    """Test snapshot assembly."""

    def test_insufficient_draft(self, draft_payload):
        """Test that incomplete drafts raise with the missing groups."""
        draft_payload["assets"] = []

        with pytest.raises(InsufficientDataError) as exc_info:
            build_snapshot_from_draft(draft_payload)

        assert exc_info.value.missing == ["assets"]
        assert str(exc_info.value) == "Missing required data: assets"

    def test_malformed_draft(self, draft_payload):
        """Test that invalid values raise a validation error."""
        draft_payload["assets"][0]["amount"] = "lots"

        with pytest.raises(ValidationError):
            build_snapshot_from_draft(draft_payload)

    def test_snapshot_from_record(self, db_session):
        """Test building a snapshot from stored rows."""
        scenario = Scenario(name="Stored")
        scenario.assets.append(Asset(name="Cash", amount=1000, category="TAXABLE", position=0))
        scenario.income_streams.append(
            IncomeStream(name="Pay", amount=100, frequency="ANNUALLY", start_date=dt.date(2024, 1, 1), position=0)
        )
        scenario.milestones.append(
            Milestone(name="Trip", type="CUSTOM", date=dt.date(2025, 1, 1), impact=-50, position=0)
        )
        db_session.add(scenario)
        db_session.commit()

        snapshot = build_snapshot_from_record(scenario)

        assert [a.id for a in snapshot.assets] == [scenario.assets[0].id]
        assert snapshot.income_streams[0].frequency == "ANNUALLY"
        assert snapshot.milestones[0].impact == -50
        assert snapshot.settings == DEFAULT_FORECAST_SETTINGS

    def test_snapshot_uses_stored_settings(self, db_session):
        """Test that stored settings override the defaults."""
        scenario = Scenario(name="Stored")
        scenario.settings = ScenarioSettings(inflation_rate=0.0, stock_growth_rate=5.0, real_estate_growth=1.0)
        db_session.add(scenario)
        db_session.commit()

        snapshot = build_snapshot_from_record(scenario)

        assert snapshot.settings.stock_growth_rate == 5.0
        assert snapshot.assets == ()


class TestForecastService:
    """Test the forecast service."""

    def test_forecast_draft(self, draft_payload):
        """Test forecasting a complete draft."""
        result = ForecastService().forecast_draft(draft_payload)

        assert len(result.timeline) == 30
        assert result.timeline[0].year == 2024
        assert result.timeline[1].milestones[0].name == "Wedding"

    def test_start_year(self, draft_payload):
        """Test that the service passes its start year to the engine."""
        result = ForecastService(start_year=2025).forecast_draft(draft_payload)
        assert result.timeline[0].year == 2025

    def test_draft_profile_is_not_validated(self, draft_payload):
        """Test that profile details outside the stored ranges still forecast."""
        draft_payload["personalProfile"] = {"age": 12, "location": "  "}

        result = ForecastService().forecast_draft(draft_payload)

        assert len(result.timeline) == 30

    @pytest.mark.parametrize("start_year", [1899, 2172])
    def test_start_year_out_of_range(self, start_year):
        """Test that the service refuses horizons outside 1900 to 2200."""
        with pytest.raises(ValueError, match="must be between 1900 and 2171"):
            ForecastService(start_year=start_year)

    def test_latest_start_year(self, draft_payload):
        """Test that a horizon ending in 2200 is allowed."""
        result = ForecastService(start_year=2171).forecast_draft(draft_payload)
        assert result.timeline[-1].year == 2200

    def test_forecast_unknown_scenario(self, db_session):
        """Test that unknown scenarios raise ScenarioNotFoundError."""
        with pytest.raises(ScenarioNotFoundError) as exc_info:
            ForecastService().forecast_scenario(db_session, "missing-id")

        assert exc_info.value.scenario_id == "missing-id"

    def test_forecast_stored_scenario(self, db_session):
        """Test forecasting a stored scenario."""
        scenario = Scenario(name="Stored")
        scenario.assets.append(
            Asset(name="Cash", amount=1000, category="TAXABLE", growth_rate=0.0, position=0)
        )
        db_session.add(scenario)
        db_session.commit()

        result = ForecastService().forecast_scenario(db_session, scenario.id)
        data = serialize_forecast(result)

        assert data["summary"]["startingNetWorth"] == 1000
        assert data["summary"]["endingNetWorth"] == 1000
        assert data["summary"]["averageAnnualGrowth"] == 0.0
