from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from datetime import date as _date
from typing import Dict, Optional, Sequence, Tuple

import pandas as pd

from . import canon, degreedays, exceptions, utils
from .types import (
    DailyDegreeDay,
    DailyTemp,
    Delivery,
    DeliveryForecastResult,
    HddStats,
    TankLevelPoint,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _TankState:
    level: float
    crossing: Optional[Tuple[str, int]] = None  # (date, day index) of first reorder crossing


def daily_consumption(beta0: float, beta1: float, hdd: float) -> float:
    """Base load plus heating draw for one day, never negative."""
    return max(0.0, beta0 + beta1 * hdd)


def _expected_hdd(
    day: str,
    forecast_hdd: Dict[str, float],
    history: Dict[str, HddStats],
) -> Tuple[float, float]:
    """(expected HDD, std): forecast value when known, else the calendar-day history."""
    if day in forecast_hdd:
        return forecast_hdd[day], 0.0
    hist = history.get(utils.month_day(day))
    if hist is None:
        return 0.0, 0.0
    return hist.mean, hist.std


def _uncertainty_band(
    level: float,
    consumption: float,
    beta0: float,
    beta1: float,
    hdd: float,
    hdd_std: float,
    days_beyond_forecast: int,
    tank_capacity: float,
) -> Tuple[Optional[float], Optional[float]]:
    """
    Level range after today's draw, widening with sqrt(days past the forecast).

    Only defined where HDD is itself an estimate (std > 0) and the day lies
    beyond the forecast horizon.
    """
    if hdd_std <= 0 or days_beyond_forecast <= 0:
        return None, None
    use_high = daily_consumption(beta0, beta1, hdd + hdd_std)
    use_low = daily_consumption(beta0, beta1, max(0.0, hdd - hdd_std))
    spread = math.sqrt(days_beyond_forecast)
    low = level - (use_high - consumption) * spread
    high = level + (consumption - use_low) * spread
    return (
        min(tank_capacity, max(0.0, low)),
        max(0.0, min(tank_capacity, high)),
    )


def project_delivery(
    current_level: float,
    tank_capacity: float,
    threshold: Optional[float],
    beta0: float,
    beta1: float,
    historical_daily: Sequence[DailyDegreeDay],
    forecast_temps: Sequence[DailyTemp],
    heating_base_temp: float = canon.DEFAULT_HEATING_BASE_F,
    max_days: int = canon.DEFAULT_MAX_DAYS,
    today: Optional[_date] = None,
) -> DeliveryForecastResult:
    """
    Simulate tank depletion day by day from `today` to find the reorder date.

    Expected HDD comes from the short-range forecast where it covers the date,
    otherwise from the historical mean for that calendar day. The first day the
    level reaches `threshold` (default 25% of capacity) is the estimated
    delivery date. Simulation stops once the tank is empty or after `max_days`.
    No delivery date means the supply outlasts the horizon.
    """
    exceptions.require(
        tank_capacity > 0, "Tank capacity must be positive.", exceptions.ForecastError
    )
    exceptions.require(
        max_days >= 0, "max_days must be non-negative.", exceptions.ForecastError
    )
    reorder_level = (
        threshold
        if threshold is not None
        else tank_capacity * canon.DEFAULT_THRESHOLD_FRACTION
    )

    history = degreedays.historical_daily_average_hdd(historical_daily)
    forecast_dd = degreedays.calculate_daily_degree_days(forecast_temps, heating_base_temp)
    forecast_hdd = {d.date: d.hdd for d in forecast_dd}
    horizon = len(forecast_dd)

    start = pd.Timestamp(today if today is not None else _date.today())
    state = _TankState(level=float(current_level))
    points: list[TankLevelPoint] = []

    for i, day in enumerate(utils.day_labels(start, max_days)):
        hdd, hdd_std = _expected_hdd(day, forecast_hdd, history)
        use = daily_consumption(beta0, beta1, hdd)
        level = state.level - use
        low, high = _uncertainty_band(
            level, use, beta0, beta1, hdd, hdd_std, i - horizon, tank_capacity
        )
        points.append(
            TankLevelPoint(
                date=day,
                level=max(0.0, level),
                level_low=low,
                level_high=high,
                is_projected=True,
            )
        )
        crossing = state.crossing
        if crossing is None and level <= reorder_level:
            crossing = (day, i)
        state = _TankState(level=level, crossing=crossing)
        if level <= 0:
            break

    if state.crossing is None:
        logger.debug(
            "Reorder level %.1f not reached within %d days.", reorder_level, len(points)
        )
        return DeliveryForecastResult(points=points)

    delivery_day, days_until = state.crossing
    return DeliveryForecastResult(
        points=points,
        estimated_delivery_date=delivery_day,
        days_until_delivery=days_until,
    )


def _gap_days(start: str, end: str) -> list[str]:
    """Days to draw down between two deliveries; none when either date is malformed."""
    try:
        return utils.days_after(start, end)
    except ValueError:
        logger.debug("Skipping drawdown between %r and %r: malformed date.", start, end)
        return []


def reconstruct_tank_history(
    deliveries: Sequence[Delivery],
    tank_capacity: float,
    beta0: float,
    beta1: float,
    daily: Sequence[DailyDegreeDay],
) -> list[TankLevelPoint]:
    """
    Sawtooth tank history anchored at known deliveries.

    The tank is taken as full before the first delivery and each delivery adds
    its quantity, capped at capacity. Between deliveries the level is drawn
    down with the fitted base + heating model on each day's actual HDD
    (0 when unknown), floored at 0. A gap with a malformed date is not
    drawn down.
    """
    if len(deliveries) < canon.MIN_DELIVERIES:
        logger.debug("No tank history: %d deliveries (need %d).", len(deliveries), canon.MIN_DELIVERIES)
        return []
    exceptions.require(
        tank_capacity > 0, "Tank capacity must be positive.", exceptions.ForecastError
    )

    ordered = sorted(deliveries, key=lambda d: d.date)
    hdd = utils.hdd_by_date(daily)
    points: list[TankLevelPoint] = []
    level = float(tank_capacity)

    for i, delivery in enumerate(ordered):
        level = min(tank_capacity, level + delivery.quantity)
        points.append(TankLevelPoint(date=delivery.date, level=level, is_projected=False))
        if i == len(ordered) - 1:
            break
        next_date = ordered[i + 1].date
        # draw down through the next delivery day; that day's point is the delivery itself
        for day in _gap_days(delivery.date, next_date):
            level = max(0.0, level - daily_consumption(beta0, beta1, hdd.get(day, 0.0)))
            if day != next_date:
                points.append(TankLevelPoint(date=day, level=level, is_projected=False))

    return points
