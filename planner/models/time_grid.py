"""
Time grid and compounding helpers for net worth projections.

This module provides the fixed yearly grid the forecast engine walks over and
the compounding factors used for inflation, raises and asset growth. All rates
in this module are annual percentages (7.0 means 7%).
"""

from typing import List

import numpy as np
from pydantic import BaseModel, Field, ValidationInfo, field_validator

DEFAULT_START_YEAR = 2024
PROJECTION_YEARS = 30

# Calendar years a grid may cover
MIN_YEAR = 1900
MAX_YEAR = 2200


def compound_factor(rate_percent: float, periods: int) -> float:
    """
    Get the compounding factor for a percentage rate over a number of periods.

    Args:
        rate_percent: Annual rate as a percentage
        periods: Number of compounding periods (years)

    Returns:
        (1 + rate_percent / 100) ** periods, or inf once that overflows a float
    """
    with np.errstate(over="ignore", divide="ignore"):
        return float(np.power(np.float64(1 + rate_percent / 100), periods))


class TimeGrid(BaseModel):
    """Time grid for net worth projections."""

    start_year: int = Field(
        ..., ge=MIN_YEAR, le=MAX_YEAR, description="Start year for projections"
    )
    end_year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR, description="End year for projections")
    base_year: int = Field(
        ..., ge=MIN_YEAR, le=MAX_YEAR, description="Base year for inflation calculations"
    )

    @field_validator("end_year")
    @classmethod
    def validate_end_year(cls, v: int, info: ValidationInfo) -> int:
        if "start_year" in info.data and v < info.data["start_year"]:
            raise ValueError("End year must be >= start year")
        return v

    @field_validator("base_year")
    @classmethod
    def validate_base_year(cls, v: int, info: ValidationInfo) -> int:
        start_year = info.data.get("start_year", v)
        end_year = info.data.get("end_year", v)
        if not (start_year <= v <= end_year):
            raise ValueError("Base year must be within the projection period")
        return v

    def get_years(self) -> List[int]:
        """Get list of years in the time grid."""
        return list(range(self.start_year, self.end_year + 1))

    def get_year_index(self, year: int) -> int:
        """Get the index of a year in the time grid."""
        if not self.start_year <= year <= self.end_year:
            raise ValueError(f"Year {year} is outside the time grid range")
        return year - self.start_year

    def get_years_from_base(self, year: int) -> int:
        """Get the number of years from the base year."""
        return year - self.base_year

    def __len__(self) -> int:
        """Get the number of years in the time grid."""
        return self.end_year - self.start_year + 1


class InflationAdjuster(BaseModel):
    """Handles inflation adjustments relative to a base year."""

    inflation_rate: float = Field(
        ..., gt=-100, description="Annual inflation rate as a percentage"
    )
    base_year: int = Field(..., ge=MIN_YEAR, le=MAX_YEAR, description="Base year")

    def inflation_factor(self, year: int) -> float:
        """Get the cumulative inflation factor from the base year to a year."""
        return compound_factor(self.inflation_rate, year - self.base_year)

    def to_nominal_value(self, real_amount: float, year: int) -> float:
        """Convert a base year amount to the given year's dollars."""
        return real_amount * self.inflation_factor(year)

    def to_real_value(self, nominal_amount: float, year: int) -> float:
        """Convert an amount in the given year's dollars to base year dollars."""
        return nominal_amount / self.inflation_factor(year)


def create_projection_grid(
    start_year: int = DEFAULT_START_YEAR, years: int = PROJECTION_YEARS
) -> TimeGrid:
    """
    Create the projection grid starting at a reference year.

    Args:
        start_year: First projected calendar year
        years: Number of projected years

    Returns:
        TimeGrid spanning ``years`` years with the base year at the start

    Raises:
        ValueError: If years is below one or the grid leaves MIN_YEAR..MAX_YEAR
    """
    if years < 1:
        raise ValueError("Projection must cover at least one year")
    if start_year < MIN_YEAR or start_year + years - 1 > MAX_YEAR:
        raise ValueError(
            f"Start year {start_year} must be between {MIN_YEAR} and "
            f"{MAX_YEAR - years + 1} for a {years}-year projection"
        )
    return TimeGrid(
        start_year=start_year, end_year=start_year + years - 1, base_year=start_year
    )
