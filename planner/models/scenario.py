"""
Pydantic models for net worth forecast scenarios.

This module defines the scenario snapshot consumed by the forecast engine:
assets, income streams, one-time milestones and the forecast settings. The
models use camelCase aliases on the wire and snake_case attributes in Python.
All rates are annual percentages (7.0 means 7%).
"""

import datetime as dt
import uuid
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AssetCategory(str, Enum):
    """Asset classification that determines the default growth rate."""

    TAXABLE = "TAXABLE"
    TAX_DEFERRED = "TAX_DEFERRED"
    TAX_FREE = "TAX_FREE"
    REAL_ESTATE = "REAL_ESTATE"
    CRYPTO = "CRYPTO"


class IncomeFrequency(str, Enum):
    """How often an income stream pays out its per-period amount."""

    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUALLY = "ANNUALLY"


class MilestoneType(str, Enum):
    """Kinds of one-time financial events."""

    RETIREMENT = "RETIREMENT"
    COLLEGE = "COLLEGE"
    MAJOR_PURCHASE = "MAJOR_PURCHASE"
    INCOME_CHANGE = "INCOME_CHANGE"
    DEATH_OF_SPOUSE = "DEATH_OF_SPOUSE"
    CUSTOM = "CUSTOM"


def generate_draft_id() -> str:
    """Generate an identifier for an unsaved draft entity."""
    return f"draft-{uuid.uuid4()}"


def to_utc_date(value: Any) -> Any:
    """
    Normalize datetimes and ISO datetime strings to their UTC calendar date.

    Plain dates and date strings are returned untouched for pydantic to parse.
    Naive datetimes are taken to already be in UTC.
    """
    if isinstance(value, str) and "T" in value:
        value = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc)
        return value.date()
    return value


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON with the presentation layer."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )


class SnapshotModel(CamelModel):
    """Base for scenario inputs, which never change during a forecast run."""

    model_config = ConfigDict(frozen=True)


class Asset(SnapshotModel):
    """A held asset with its current balance."""

    id: str = Field(default_factory=generate_draft_id, description="Asset id")
    name: str = Field(..., description="Asset name")
    amount: float = Field(..., description="Current balance")
    category: AssetCategory = Field(..., description="Asset category")
    growth_rate: Optional[float] = Field(
        default=None,
        description="Annual growth override in percent (None = category default)",
    )


class IncomeStream(SnapshotModel):
    """A recurring cash inflow."""

    id: str = Field(default_factory=generate_draft_id, description="Stream id")
    name: str = Field(..., description="Income source name")
    amount: float = Field(..., description="Amount paid per period")
    frequency: str = Field(
        default=IncomeFrequency.MONTHLY.value,
        description="MONTHLY, QUARTERLY or ANNUALLY; other values count as MONTHLY",
    )
    start_date: dt.date = Field(..., description="First day the stream pays")
    end_date: Optional[dt.date] = Field(
        default=None, description="Last day the stream pays (None = open ended)"
    )
    raise_rate: Optional[float] = Field(
        default=None, description="Annual compounding raise in percent"
    )

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalize_dates(cls, v: Any) -> Any:
        return to_utc_date(v)

    @field_validator("frequency", mode="before")
    @classmethod
    def frequency_value(cls, v: Any) -> Any:
        if isinstance(v, IncomeFrequency):
            return v.value
        return v


class Milestone(SnapshotModel):
    """A one-time dated financial event with a signed cash impact."""

    id: str = Field(default_factory=generate_draft_id, description="Milestone id")
    name: str = Field(..., description="Milestone name")
    type: MilestoneType = Field(default=MilestoneType.CUSTOM, description="Kind")
    date: dt.date = Field(..., description="Date the event happens")
    impact: float = Field(..., description="Signed one-time cash delta")

    @field_validator("date", mode="before")
    @classmethod
    def normalize_date(cls, v: Any) -> Any:
        return to_utc_date(v)


class ForecastSettings(SnapshotModel):
    """Market and inflation assumptions, in percent."""

    inflation_rate: float = Field(
        default=2.5, gt=-100, description="Annual inflation (above -100)"
    )
    stock_growth_rate: float = Field(
        default=7.0, description="Default growth for market assets"
    )
    real_estate_growth: float = Field(
        default=3.0, description="Default growth for real estate"
    )


DEFAULT_FORECAST_SETTINGS = ForecastSettings()


class ScenarioSnapshot(SnapshotModel):
    """Everything the forecast engine needs to project one scenario."""

    assets: Tuple[Asset, ...] = Field(default=(), description="Held assets in order")
    income_streams: Tuple[IncomeStream, ...] = Field(
        default=(), description="Income streams in order"
    )
    milestones: Tuple[Milestone, ...] = Field(
        default=(), description="One-time milestones in order"
    )
    settings: ForecastSettings = Field(
        default=DEFAULT_FORECAST_SETTINGS, description="Forecast assumptions"
    )


class PersonalProfile(CamelModel):
    """Personal details stored with a scenario."""

    age: Optional[int] = Field(default=None, ge=16, le=100, description="Age")
    location: str = Field(default="", description="Place of residence")


class DraftScenario(CamelModel):
    """
    An unsaved scenario submitted for a preview forecast.

    The personal profile is passed through as sent; forecasts do not use it,
    so only stored scenarios check age and location.
    """

    personal_profile: Dict[str, Any] = Field(default_factory=dict)
    assets: Tuple[Asset, ...] = Field(default=())
    income_streams: Tuple[IncomeStream, ...] = Field(default=())
    milestones: Tuple[Milestone, ...] = Field(default=())
    settings: Optional[ForecastSettings] = Field(default=None)

    def to_snapshot(self) -> ScenarioSnapshot:
        """Build the engine input, filling in default settings."""
        return ScenarioSnapshot(
            assets=self.assets,
            income_streams=self.income_streams,
            milestones=self.milestones,
            settings=self.settings or DEFAULT_FORECAST_SETTINGS,
        )
