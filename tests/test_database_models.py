"""
Tests for SQLAlchemy database models.

This module tests the scenario tables, their relationships and the
conversions between stored rows and the forecast input models.
"""

import datetime as dt

import pytest
from sqlalchemy.exc import IntegrityError

from planner.database.models import Asset, IncomeStream, Milestone, Scenario, ScenarioSettings
from planner.models.scenario import AssetCategory, ForecastSettings, MilestoneType


class TestDatabaseModels:
    """Test suite for database models and relationships."""

    @pytest.fixture
    def sample_scenario(self, db_session):
        """Create a scenario with one of each related row."""
        scenario = Scenario(name="Baseline", user_id="user-1", location="Denver, CO", age=40)
        scenario.assets.append(
            Asset(name="Brokerage", amount=50000, category="TAXABLE", position=0)
        )
        scenario.assets.append(
            Asset(name="Home", amount=400000, category="REAL_ESTATE", growth_rate=4.0, position=1)
        )
        scenario.income_streams.append(
            IncomeStream(
                name="Salary",
                amount=7000,
                frequency="MONTHLY",
                start_date=dt.date(2024, 1, 1),
                raise_rate=2.0,
                position=0,
            )
        )
        scenario.milestones.append(
            Milestone(name="Roof", type="MAJOR_PURCHASE", date=dt.date(2027, 5, 1), impact=-15000, position=0)
        )
        scenario.settings = ScenarioSettings(inflation_rate=3.0, stock_growth_rate=6.0, real_estate_growth=2.0)
        db_session.add(scenario)
        db_session.commit()
        db_session.refresh(scenario)
        return scenario

    def test_scenario_creation(self, db_session):
        """Test creating a scenario with defaults."""
        scenario = Scenario(name="Empty")
        db_session.add(scenario)
        db_session.commit()

        assert len(scenario.id) == 36
        assert scenario.created_at is not None
        assert scenario.assets == []
        assert scenario.settings is None

    def test_relationships_in_position_order(self, db_session, sample_scenario):
        """Test that related rows load in their stored order."""
        assert [a.name for a in sample_scenario.assets] == ["Brokerage", "Home"]
        assert sample_scenario.income_streams[0].scenario_id == sample_scenario.id
        assert sample_scenario.settings.inflation_rate == 3.0

    def test_to_dict(self, sample_scenario):
        """Test the camelCase scenario representation."""
        data = sample_scenario.to_dict(include_relations=True)

        assert data["name"] == "Baseline"
        assert data["personalProfile"] == {"age": 40, "location": "Denver, CO"}
        assert data["assets"][1]["growthRate"] == 4.0
        assert data["assets"][0]["growthRate"] is None
        assert data["incomeStreams"][0]["startDate"] == "2024-01-01"
        assert data["incomeStreams"][0]["endDate"] is None
        assert data["milestones"][0]["date"] == "2027-05-01"
        assert data["settings"] == {
            "inflationRate": 3.0,
            "stockGrowthRate": 6.0,
            "realEstateGrowth": 2.0,
        }

    def test_to_dict_without_relations(self, sample_scenario):
        """Test that relations are left out by default."""
        data = sample_scenario.to_dict()
        assert "assets" not in data
        assert data["userId"] == "user-1"

    def test_rows_to_models(self, sample_scenario):
        """Test converting stored rows into forecast inputs."""
        asset = sample_scenario.assets[0].to_model()
        stream = sample_scenario.income_streams[0].to_model()
        milestone = sample_scenario.milestones[0].to_model()

        assert asset.category is AssetCategory.TAXABLE
        assert asset.growth_rate is None
        assert stream.start_date == dt.date(2024, 1, 1)
        assert stream.raise_rate == 2.0
        assert milestone.type is MilestoneType.MAJOR_PURCHASE
        assert sample_scenario.settings.to_model() == ForecastSettings(
            inflation_rate=3.0, stock_growth_rate=6.0, real_estate_growth=2.0
        )

    def test_cascade_delete(self, db_session, sample_scenario):
        """Test that deleting a scenario removes its rows."""
        db_session.delete(sample_scenario)
        db_session.commit()

        assert db_session.query(Asset).count() == 0
        assert db_session.query(IncomeStream).count() == 0
        assert db_session.query(Milestone).count() == 0
        assert db_session.query(ScenarioSettings).count() == 0

    def test_invalid_category_rejected(self, db_session, sample_scenario):
        """Test the asset category constraint."""
        db_session.add(
            Asset(scenario_id=sample_scenario.id, name="Art", amount=1, category="COLLECTIBLES")
        )
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_end_date_before_start_rejected(self, db_session, sample_scenario):
        """Test the income stream date constraint."""
        db_session.add(
            IncomeStream(
                scenario_id=sample_scenario.id,
                name="Backwards",
                amount=1,
                start_date=dt.date(2030, 1, 1),
                end_date=dt.date(2029, 1, 1),
            )
        )
        with pytest.raises(IntegrityError):
            db_session.commit()

    def test_age_constraint(self, db_session):
        """Test the scenario age constraint."""
        db_session.add(Scenario(name="Too young", age=10))
        with pytest.raises(IntegrityError):
            db_session.commit()
