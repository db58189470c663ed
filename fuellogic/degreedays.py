from __future__ import annotations
from typing import Dict, Sequence

import numpy as np
import pandas as pd

from . import canon, utils
from .types import (
    AggregatedDegreeDays,
    AnnualDegreeDays,
    DailyDegreeDay,
    DailyTemp,
    HddStats,
)


def calculate_daily_degree_days(
    temps: Sequence[DailyTemp],
    heating_base: float = canon.DEFAULT_HEATING_BASE_F,
    cooling_base: float = canon.DEFAULT_COOLING_BASE_F,
) -> list[DailyDegreeDay]:
    """
    One DailyDegreeDay per input day, same order.

    mean = (max + min) / 2; HDD = max(0, heating_base - mean);
    CDD = max(0, mean - cooling_base).
    """
    if len(temps) == 0:
        return []
    tmax = np.asarray([t.temp_max_f for t in temps], dtype=float)
    tmin = np.asarray([t.temp_min_f for t in temps], dtype=float)
    mean_temp = (tmax + tmin) / 2.0
    hdd = np.maximum(0.0, heating_base - mean_temp)
    cdd = np.maximum(0.0, mean_temp - cooling_base)
    return [
        DailyDegreeDay(
            date=t.date,
            hdd=float(hdd[i]),
            cdd=float(cdd[i]),
            mean_temp=float(mean_temp[i]),
        )
        for i, t in enumerate(temps)
    ]


def aggregate_frame(frame: pd.DataFrame, start: str, end: str) -> AggregatedDegreeDays:
    # ISO dates are zero-padded, so string order is calendar order
    mask = (frame["date"] >= start) & (frame["date"] < end)
    sel = frame.loc[mask]
    if sel.empty:
        return AggregatedDegreeDays()
    return AggregatedDegreeDays(
        hdd=float(sel["hdd"].sum()),
        cdd=float(sel["cdd"].sum()),
        days=int(len(sel)),
    )


def aggregate_degree_days(
    daily: Sequence[DailyDegreeDay], start: str, end: str
) -> AggregatedDegreeDays:
    """Sum HDD/CDD and count days over [start, end)."""
    return aggregate_frame(utils.degree_day_frame(daily), start, end)


def days_between(start: str, end: str) -> int:
    """Whole calendar days from start to end (negative when end precedes start)."""
    delta = utils.parse_date(end) - utils.parse_date(start)
    return int(round(delta / pd.Timedelta(days=1)))


def annual_degree_days(daily: Sequence[DailyDegreeDay]) -> AnnualDegreeDays:
    """
    Annualised HDD/CDD: series totals scaled by 365.25 / number of days.

    This is a normalised rate, not a calendar-year sum, so any span of history
    can be used.
    """
    if len(daily) == 0:
        return AnnualDegreeDays()
    frame = utils.degree_day_frame(daily)
    years = len(frame) / canon.DAYS_PER_YEAR
    return AnnualDegreeDays(
        annual_hdd=float(frame["hdd"].sum()) / years,
        annual_cdd=float(frame["cdd"].sum()) / years,
    )


def historical_daily_average_hdd(
    daily: Sequence[DailyDegreeDay],
) -> Dict[str, HddStats]:
    """
    Mean and population std of HDD per calendar day ('MM-DD'), across years.

    Keys appear in order of first occurrence in the series.
    """
    frame = utils.degree_day_frame(daily)
    if frame.empty:
        return {}
    frame["mmdd"] = frame["date"].str.slice(5)
    grouped = frame.groupby("mmdd", sort=False)["hdd"].agg(
        mean="mean", std=lambda s: float(np.std(s.to_numpy(), ddof=0))
    )
    return {
        str(key): HddStats(mean=float(row["mean"]), std=float(row["std"]))
        for key, row in grouped.iterrows()
    }


def monthly_degree_days(daily: Sequence[DailyDegreeDay]) -> pd.DataFrame:
    """
    Year-month breakdown of a daily series, newest month first.

    Columns: ['month', 'hdd', 'cdd', 'mean_temp', 'days'] with 'month' as 'YYYY-MM'.
    """
    cols = ["month", "hdd", "cdd", "mean_temp", "days"]
    frame = utils.degree_day_frame(daily)
    if frame.empty:
        return pd.DataFrame(columns=cols)
    frame["month"] = frame["date"].str.slice(0, 7)
    out = (
        frame.groupby("month", as_index=False)
        .agg(
            hdd=("hdd", "sum"),
            cdd=("cdd", "sum"),
            mean_temp=("mean_temp", "mean"),
            days=("date", "count"),
        )
        .sort_values("month", ascending=False)
        .reset_index(drop=True)
    )
    return out[cols]
