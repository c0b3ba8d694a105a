"""Database models and configuration for the net worth planner."""

from .base import Base, create_tables, drop_tables, get_engine, get_session
from .models import Asset, IncomeStream, Milestone, Scenario, ScenarioSettings

__all__ = [
    "Base",
    "create_tables",
    "drop_tables",
    "get_engine",
    "get_session",
    "Scenario",
    "Asset",
    "IncomeStream",
    "Milestone",
    "ScenarioSettings",
]
