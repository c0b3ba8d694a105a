"""
Deterministic net worth projection engine.

This module turns a ScenarioSnapshot into a ForecastResult covering a fixed
30-year horizon. It performs no I/O and never mutates its inputs; identical
inputs always produce identical results.

Each simulated year runs these steps in order:

1. Project income from every active stream (annualized, raises, inflation).
2. Grow every asset by its resolved growth rate.
3. Apply the year's milestone impacts to the target asset.
4. Record net worth.
5. Add 20% of income as savings to the target asset.
6. Record the year's snapshot.

The target asset is the first TAXABLE asset, or the first asset when there is
no TAXABLE one. Balances are kept as a numpy vector and every year works on a
new vector, so a recorded year is never touched by a later one.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .forecast import AssetProjection, ForecastResult, ForecastSummary, YearlyProjection
from .scenario import (
    DEFAULT_FORECAST_SETTINGS,
    Asset,
    AssetCategory,
    ForecastSettings,
    IncomeFrequency,
    IncomeStream,
    Milestone,
    ScenarioSnapshot,
)
from .time_grid import (
    DEFAULT_START_YEAR,
    PROJECTION_YEARS,
    InflationAdjuster,
    compound_factor,
    create_projection_grid,
)

# Fixed share of income assumed saved each year
SAVINGS_RATE = 0.20

PERIODS_PER_YEAR: Dict[IncomeFrequency, int] = {
    IncomeFrequency.MONTHLY: 12,
    IncomeFrequency.QUARTERLY: 4,
    IncomeFrequency.ANNUALLY: 1,
}

# Frequency used for values outside IncomeFrequency
FALLBACK_FREQUENCY = IncomeFrequency.MONTHLY

# Settings field holding the default growth rate for each category
CATEGORY_GROWTH_SETTING: Dict[AssetCategory, str] = {
    AssetCategory.TAXABLE: "stock_growth_rate",
    AssetCategory.TAX_DEFERRED: "stock_growth_rate",
    AssetCategory.TAX_FREE: "stock_growth_rate",
    AssetCategory.CRYPTO: "stock_growth_rate",
    AssetCategory.REAL_ESTATE: "real_estate_growth",
}


def resolve_growth_rate(asset: Asset, settings: ForecastSettings) -> float:
    """
    Get the annual growth rate an asset uses for the whole run.

    Args:
        asset: Asset to resolve
        settings: Forecast settings supplying category defaults

    Returns:
        The asset's own growth rate when set, else its category default
    """
    if asset.growth_rate is not None:
        return asset.growth_rate
    setting = CATEGORY_GROWTH_SETTING.get(asset.category, "stock_growth_rate")
    return getattr(settings, setting)


def periods_per_year(frequency: str) -> int:
    """Number of payments per year, treating unknown frequencies as MONTHLY."""
    try:
        resolved = IncomeFrequency(frequency)
    except ValueError:
        resolved = FALLBACK_FREQUENCY
    return PERIODS_PER_YEAR[resolved]


def annualize_amount(amount: float, frequency: str) -> float:
    """Convert a per-period amount to a yearly amount."""
    return amount * periods_per_year(frequency)


def is_stream_active(stream: IncomeStream, year: int) -> bool:
    """Check whether a stream pays anything during a calendar year."""
    if stream.start_date.year > year:
        return False
    return stream.end_date is None or stream.end_date.year >= year


def project_stream_income(
    stream: IncomeStream, year_index: int, inflation: InflationAdjuster, year: int
) -> float:
    """
    Project one stream's income for a year, ignoring its activation window.

    Raises compound on the annualized amount from the first projected year,
    then inflation is applied on top of that.
    """
    annual_amount = annualize_amount(stream.amount, stream.frequency)
    if stream.raise_rate is not None and year_index > 0:
        annual_amount *= compound_factor(stream.raise_rate, year_index)
    return inflation.to_nominal_value(annual_amount, year)


def project_income_for_year(
    income_streams: Sequence[IncomeStream],
    target_year: int,
    year_index: int,
    inflation: InflationAdjuster,
) -> float:
    """
    Total income from all streams active in a year.

    Args:
        income_streams: Streams to project
        target_year: Calendar year being projected
        year_index: Offset of target_year from the first projected year
        inflation: Inflation adjuster based at the first projected year

    Returns:
        Sum of the inflation-adjusted annual income of active streams
    """
    total_income = 0.0
    for stream in income_streams:
        if is_stream_active(stream, target_year):
            total_income += project_stream_income(
                stream, year_index, inflation, target_year
            )
    return total_income


def select_year_milestones(
    milestones: Sequence[Milestone], target_year: int
) -> List[Milestone]:
    """Milestones dated in the target calendar year, in input order."""
    return [milestone for milestone in milestones if milestone.date.year == target_year]


def find_target_asset_index(assets: Sequence[Asset]) -> Optional[int]:
    """Index of the asset receiving milestone impacts and savings."""
    for index, asset in enumerate(assets):
        if asset.category == AssetCategory.TAXABLE:
            return index
    return 0 if assets else None


def calculate_cagr(start_value: float, end_value: float, years: int) -> float:
    """
    Compound annual growth rate in percent.

    Returns 0 when the starting value is not positive or there are no years.
    A negative ending value is reported as a total loss (-100).
    """
    if start_value <= 0 or years <= 0:
        return 0.0
    ratio = max(end_value / start_value, 0.0)
    return (ratio ** (1 / years) - 1) * 100


def summarize_timeline(
    timeline: Sequence[YearlyProjection], total_years: int = PROJECTION_YEARS
) -> ForecastSummary:
    """Derive the forecast summary from a timeline."""
    starting_net_worth = timeline[0].net_worth if timeline else 0.0
    ending_net_worth = timeline[-1].net_worth if timeline else 0.0
    return ForecastSummary(
        starting_net_worth=starting_net_worth,
        ending_net_worth=ending_net_worth,
        total_years=total_years,
        total_income_projected=sum(year.total_income for year in timeline),
        average_annual_growth=calculate_cagr(
            starting_net_worth, ending_net_worth, total_years
        ),
    )


def _asset_snapshot(
    assets: Sequence[Asset], balances: NDArray[np.float64], rates: NDArray[np.float64]
) -> List[AssetProjection]:
    return [
        AssetProjection(
            id=asset.id,
            name=asset.name,
            amount=float(balance),
            growth_rate=float(rate),
            category=asset.category,
        )
        for asset, balance, rate in zip(assets, balances, rates)
    ]


def project(
    scenario: ScenarioSnapshot,
    settings: Optional[ForecastSettings] = None,
    start_year: int = DEFAULT_START_YEAR,
) -> ForecastResult:
    """
    Project a scenario's net worth over the fixed horizon.

    Args:
        scenario: Scenario inputs
        settings: Forecast assumptions (defaults to the scenario's own settings)
        start_year: Calendar year of the first projected year

    Returns:
        ForecastResult with one YearlyProjection per year and a summary

    Raises:
        ValueError: If the horizon starting at start_year leaves the supported
            calendar range (1900 to 2200)
    """
    if settings is None:
        settings = scenario.settings or DEFAULT_FORECAST_SETTINGS

    grid = create_projection_grid(start_year, PROJECTION_YEARS)
    inflation = InflationAdjuster(
        inflation_rate=settings.inflation_rate, base_year=grid.base_year
    )

    assets = list(scenario.assets)
    growth_rates = np.array(
        [resolve_growth_rate(asset, settings) for asset in assets], dtype=np.float64
    )
    growth_factors = 1 + growth_rates / 100
    balances = np.array([asset.amount for asset in assets], dtype=np.float64)
    target_index = find_target_asset_index(assets)

    timeline: List[YearlyProjection] = []
    with np.errstate(over="ignore", invalid="ignore"):
        for year_index, year in enumerate(grid.get_years()):
            total_income = project_income_for_year(
                scenario.income_streams, year, year_index, inflation
            )

            # New vector for this year; earlier years keep theirs
            balances = balances * growth_factors

            year_milestones = select_year_milestones(scenario.milestones, year)
            milestone_impact = sum(milestone.impact for milestone in year_milestones)
            if milestone_impact != 0 and target_index is not None:
                balances[target_index] += milestone_impact

            net_worth = float(balances.sum())

            savings_from_income = total_income * SAVINGS_RATE
            # Negative income lowers the target balance too
            if target_index is not None:
                balances[target_index] += savings_from_income

            timeline.append(
                YearlyProjection(
                    year=year,
                    net_worth=net_worth,
                    total_income=total_income,
                    total_expenses=total_income - savings_from_income,
                    assets=_asset_snapshot(assets, balances, growth_rates),
                    milestones=[milestone.model_copy() for milestone in year_milestones],
                    savings_rate=(
                        savings_from_income / total_income * 100
                        if total_income > 0
                        else 0.0
                    ),
                )
            )

    return ForecastResult(timeline=timeline, summary=summarize_timeline(timeline))
