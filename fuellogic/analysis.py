"""Per-fuel-source orchestration of the degree-day engine.

Callers hand in fuel sources and a daily degree-day series; each helper
returns None (or an empty container) when a source lacks the data needed,
so presentation code can render whatever is available.
"""

from __future__ import annotations
import logging
from datetime import date as _date
from typing import Dict, Mapping, Optional, Sequence, cast

import pandas as pd

from . import canon, comparison, degreedays, forecast, regression, stats, utils
from .config import EngineConfig, default_config
from .types import (
    BillRecord,
    DailyDegreeDay,
    DailyTemp,
    Delivery,
    FitQuality,
    FuelComparisonEntry,
    FuelReference,
    FuelSource,
    RegressionResult,
    RegressionSummary,
    TankForecast,
)

logger = logging.getLogger(__name__)


def weather_degree_days(
    temps: Sequence[DailyTemp], config: Optional[EngineConfig] = None
) -> list[DailyDegreeDay]:
    """Daily degree days using the configured heating and cooling base temperatures."""
    cfg = config or default_config()
    return degreedays.calculate_daily_degree_days(
        temps,
        cfg.degree_days.heating_base_temp_f,
        cfg.degree_days.cooling_base_temp_f,
    )


def history_window(
    daily: Sequence[DailyDegreeDay],
    config: Optional[EngineConfig] = None,
    today: Optional[_date] = None,
) -> list[DailyDegreeDay]:
    """Days in the configured number of years before `today` (today excluded)."""
    cfg = config or default_config()
    end = pd.Timestamp(today if today is not None else _date.today()).normalize()
    start = end - pd.DateOffset(years=cfg.degree_days.years_of_history)
    lo, hi = utils.iso(start), utils.iso(end)
    return [d for d in daily if lo <= d.date < hi]


def source_intervals(source: FuelSource) -> list[BillRecord]:
    """Billing intervals for a source; deliveries become delivery-to-delivery spans."""
    if source.input_mode == "delivery":
        return regression.convert_deliveries_to_intervals(source.bills)
    return list(source.bills)


def analyze_source(
    source: FuelSource, daily: Sequence[DailyDegreeDay]
) -> Optional[RegressionResult]:
    if len(source.bills) < canon.MIN_DELIVERIES or len(daily) == 0:
        logger.debug("Source %s: not enough bills or weather to fit.", source.id)
        return None
    intervals = source_intervals(source)
    if len(intervals) < canon.MIN_OBSERVATIONS:
        logger.debug(
            "Source %s: %d intervals after conversion (need %d).",
            source.id,
            len(intervals),
            canon.MIN_OBSERVATIONS,
        )
        return None
    return regression.run_regression(intervals, daily, source.purpose)


def analyze_sources(
    sources: Sequence[FuelSource], daily: Sequence[DailyDegreeDay]
) -> Dict[str, RegressionResult]:
    """Regression per source id, omitting sources that cannot be fitted."""
    results: Dict[str, RegressionResult] = {}
    if len(daily) == 0:
        return results
    for source in sources:
        result = analyze_source(source, daily)
        if result is not None:
            results[source.id] = result
    return results


def forecast_source(
    source: FuelSource,
    fit: RegressionResult,
    daily: Sequence[DailyDegreeDay],
    forecast_temps: Sequence[DailyTemp],
    config: Optional[EngineConfig] = None,
    today: Optional[_date] = None,
) -> Optional[TankForecast]:
    """
    Tank history reconstructed from the source's deliveries plus a forward
    projection from its current level. None without tank capacity or level.
    """
    if not source.tank_capacity or source.current_tank_level is None:
        logger.debug("Source %s: no tank parameters, skipping forecast.", source.id)
        return None
    cfg = config or default_config()
    beta1 = fit.beta1 or 0.0

    deliveries = [
        Delivery(date=b.end_date, quantity=b.quantity)
        for b in source.bills
        if b.end_date and b.quantity > 0
    ]
    history = (
        forecast.reconstruct_tank_history(
            deliveries, source.tank_capacity, fit.beta0, beta1, daily
        )
        if len(deliveries) >= canon.MIN_DELIVERIES
        else []
    )

    threshold = (
        source.delivery_threshold
        if source.delivery_threshold is not None
        else source.tank_capacity * cfg.forecast.threshold_fraction
    )
    projection = forecast.project_delivery(
        source.current_tank_level,
        source.tank_capacity,
        threshold,
        fit.beta0,
        beta1,
        daily,
        forecast_temps,
        heating_base_temp=cfg.degree_days.heating_base_temp_f,
        max_days=cfg.forecast.max_days,
        today=today,
    )
    return TankForecast(history=history, projection=projection)


def total_heat_demand_btu(
    sources: Sequence[FuelSource],
    regressions: Mapping[str, RegressionResult],
    fuels: Sequence[FuelReference],
) -> float:
    """Delivered heating demand across all fitted sources with a known fuel."""
    by_key = {f.key: f for f in fuels}
    total = 0.0
    for source in sources:
        fit = regressions.get(source.id)
        fuel = by_key.get(source.fuel_type)
        if fit is None or fuel is None:
            continue
        if fit.annual_heating_load > 0:
            total += comparison.calculate_heat_demand_btu(
                fit.annual_heating_load, fuel, source.system_efficiency
            )
    return total


def compare_sources(
    sources: Sequence[FuelSource],
    regressions: Mapping[str, RegressionResult],
    fuels: Sequence[FuelReference],
    price_overrides: Optional[Mapping[str, float]] = None,
) -> list[FuelComparisonEntry]:
    """Fuel cost comparison for the building's fitted heating demand."""
    demand = total_heat_demand_btu(sources, regressions, fuels)
    if demand == 0:
        return []
    known = {f.key for f in fuels}
    current = next(
        (s.fuel_type for s in sources if s.id in regressions and s.fuel_type in known),
        None,
    )
    return comparison.compare_fuel_costs(demand, fuels, current, price_overrides)


def annual_quantity_from_cost(annual_cost: float, price_per_unit: float) -> Optional[float]:
    if price_per_unit <= 0:
        return None
    return annual_cost / price_per_unit


def fit_quality(r2: float) -> FitQuality:
    for cutoff, label in canon.FIT_QUALITY:
        if r2 >= cutoff:
            return cast(FitQuality, label)
    return "poor"


def summarise(fit: RegressionResult, price_per_unit: float = 0.0) -> RegressionSummary:
    base_pct = (
        fit.annual_base_load / fit.annual_total * 100.0 if fit.annual_total > 0 else 0.0
    )
    payload: RegressionSummary = cast(
        RegressionSummary,
        {
            "annual_total": float(fit.annual_total),
            "annual_cost": float(fit.annual_total * price_per_unit),
            "base_pct": float(base_pct),
            "climate_pct": float(100.0 - base_pct),
            "r_squared": float(fit.r_squared),
            "fit_quality": fit_quality(fit.r_squared),
            "residual_std_error": stats.residual_std_error(fit.residuals),
        },
    )
    return payload
