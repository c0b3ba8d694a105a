"""
Forecast result models.

A ForecastResult is built fresh by every engine run and owned by the caller.
Each YearlyProjection holds its own AssetProjection objects, so editing one
year's assets never changes another year.

Results may hold inf or nan when extreme growth or inflation rates overflow a
float.
"""

from typing import Any, Dict, List

from pydantic import ConfigDict, Field

from .scenario import AssetCategory, CamelModel, Milestone


class ResultModel(CamelModel):
    """Base for engine output."""

    model_config = ConfigDict(allow_inf_nan=True)


class AssetProjection(ResultModel):
    """Balance of one asset at the end of a projected year."""

    id: str = Field(..., description="Asset id")
    name: str = Field(..., description="Asset name")
    amount: float = Field(
        ..., description="Balance after growth, milestones and savings"
    )
    growth_rate: float = Field(..., description="Resolved annual growth in percent")
    category: AssetCategory = Field(..., description="Asset category")


class YearlyProjection(ResultModel):
    """One simulated calendar year."""

    year: int = Field(..., description="Calendar year")
    net_worth: float = Field(..., description="Sum of balances before savings")
    total_income: float = Field(..., description="Inflation-adjusted income")
    total_expenses: float = Field(..., description="Income not saved")
    assets: List[AssetProjection] = Field(default_factory=list)
    milestones: List[Milestone] = Field(default_factory=list)
    savings_rate: float = Field(..., description="Saved share of income in percent")


class ForecastSummary(ResultModel):
    """Headline figures derived from the timeline."""

    starting_net_worth: float
    ending_net_worth: float
    total_years: int
    total_income_projected: float
    average_annual_growth: float = Field(..., description="CAGR in percent")


class ForecastResult(ResultModel):
    """Timeline plus summary for one scenario."""

    timeline: List[YearlyProjection] = Field(default_factory=list)
    summary: ForecastSummary

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase JSON structure the web client reads."""
        return self.model_dump(by_alias=True, mode="json")
