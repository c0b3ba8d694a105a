"""Data models and the projection engine for net worth forecasts."""

from .scenario import (
    DEFAULT_FORECAST_SETTINGS,
    Asset,
    AssetCategory,
    DraftScenario,
    ForecastSettings,
    IncomeFrequency,
    IncomeStream,
    Milestone,
    MilestoneType,
    PersonalProfile,
    ScenarioSnapshot,
)
from .forecast import (
    AssetProjection,
    ForecastResult,
    ForecastSummary,
    YearlyProjection,
)
from .forecast_engine import calculate_cagr, project
from .time_grid import DEFAULT_START_YEAR, PROJECTION_YEARS, TimeGrid

__all__ = [
    "DEFAULT_FORECAST_SETTINGS",
    "DEFAULT_START_YEAR",
    "PROJECTION_YEARS",
    "Asset",
    "AssetCategory",
    "DraftScenario",
    "ForecastSettings",
    "IncomeFrequency",
    "IncomeStream",
    "Milestone",
    "MilestoneType",
    "PersonalProfile",
    "ScenarioSnapshot",
    "AssetProjection",
    "ForecastResult",
    "ForecastSummary",
    "YearlyProjection",
    "TimeGrid",
    "calculate_cagr",
    "project",
]
