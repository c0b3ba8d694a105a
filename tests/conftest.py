"""
Pytest configuration and shared fixtures for the net worth planner tests.
"""

import os

# Settings require a secret key; set one before the app modules read it
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("APP_ENV", "testing")

import datetime as dt  # noqa: E402

import pytest  # noqa: E402

from planner import create_app  # noqa: E402
from planner.config import reset_global_settings  # noqa: E402
from planner.database.base import (  # noqa: E402
    create_tables,
    drop_tables,
    get_engine,
    get_session,
    reset_engine,
)
from planner.models.scenario import (  # noqa: E402
    Asset,
    ForecastSettings,
    IncomeStream,
    Milestone,
    ScenarioSnapshot,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Make every test read settings from the current environment."""
    reset_global_settings()
    yield
    reset_global_settings()


@pytest.fixture(scope="function")
def db_engine(tmp_path, monkeypatch):
    """Create a SQLite database file for testing."""
    monkeypatch.setenv("DB_URL", f"sqlite:///{tmp_path / 'planner_test.db'}")
    reset_engine()
    create_tables()
    yield get_engine()
    drop_tables()
    reset_engine()


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for testing."""
    session = get_session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(db_engine):
    """Create the Flask application bound to the test database."""
    return create_app("testing")


@pytest.fixture
def client(app):
    """Create a test client for the application."""
    return app.test_client()


@pytest.fixture
def settings():
    """Default forecast settings."""
    return ForecastSettings(inflation_rate=2.5, stock_growth_rate=7.0, real_estate_growth=3.0)


@pytest.fixture
def sample_snapshot(settings):
    """A scenario with three assets, two income streams and two milestones."""
    return ScenarioSnapshot(
        assets=[
            Asset(id="asset-1", name="Stock Portfolio", amount=100000, category="TAXABLE", growth_rate=7.0),
            Asset(id="asset-2", name="Primary Residence", amount=300000, category="REAL_ESTATE", growth_rate=3.0),
            Asset(id="asset-3", name="401k", amount=50000, category="TAX_DEFERRED", growth_rate=None),
        ],
        income_streams=[
            IncomeStream(
                id="income-1",
                name="Primary Salary",
                amount=8000,
                frequency="MONTHLY",
                start_date=dt.date(2024, 1, 1),
                raise_rate=3.0,
            ),
            IncomeStream(
                id="income-2",
                name="Consulting Income",
                amount=5000,
                frequency="QUARTERLY",
                start_date=dt.date(2024, 1, 1),
                end_date=dt.date(2027, 12, 31),
            ),
        ],
        milestones=[
            Milestone(id="milestone-1", name="New Car Purchase", type="MAJOR_PURCHASE", date=dt.date(2026, 6, 1), impact=-30000),
            Milestone(id="milestone-2", name="Inheritance", type="CUSTOM", date=dt.date(2028, 1, 1), impact=75000),
        ],
        settings=settings,
    )


@pytest.fixture
def draft_payload():
    """A draft scenario body as sent by the web client."""
    return {
        "personalProfile": {"age": 30, "location": "Austin, TX"},
        "assets": [
            {"name": "Brokerage", "amount": 50000, "category": "TAXABLE", "growthRate": None},
            {"name": "Home", "amount": 250000, "category": "REAL_ESTATE", "growthRate": None},
        ],
        "incomeStreams": [
            {
                "name": "Salary",
                "amount": 6000,
                "frequency": "MONTHLY",
                "startDate": "2024-01-01T00:00:00.000Z",
                "endDate": None,
                "raiseRate": 2.0,
            }
        ],
        "milestones": [
            {"name": "Wedding", "type": "CUSTOM", "date": "2025-09-15T00:00:00.000Z", "impact": -20000}
        ],
        "settings": {"inflationRate": 2.5, "stockGrowthRate": 7.0, "realEstateGrowth": 3.0},
    }
