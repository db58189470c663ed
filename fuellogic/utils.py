# fuellogic/utils.py
from __future__ import annotations
import numpy as np
import pandas as pd
from datetime import date as _date
from typing import Dict, Iterable, Sequence

from . import canon
from .types import DailyDegreeDay


def parse_date(s: str) -> pd.Timestamp:
    """
    Parse a zero-padded ISO 'YYYY-MM-DD' string to a naive midnight Timestamp.
    Raises ValueError for blank or malformed input.
    """
    if not s or not str(s).strip():
        raise ValueError("Date string is empty.")
    ts = pd.to_datetime(str(s).strip(), format=canon.DATE_FORMAT, errors="raise")
    if pd.isna(ts):
        raise ValueError(f"Invalid date '{s}'.")
    return pd.Timestamp(ts).normalize()


def iso(ts: pd.Timestamp | _date) -> str:
    return pd.Timestamp(ts).strftime(canon.DATE_FORMAT)


def month_day(s: str) -> str:
    """'YYYY-MM-DD' → 'MM-DD' (year ignored)."""
    return s[5:]


def day_labels(start: pd.Timestamp | _date, periods: int) -> list[str]:
    """ISO labels for `periods` consecutive calendar days from `start`."""
    if periods <= 0:
        return []
    rng = pd.date_range(pd.Timestamp(start).normalize(), periods=periods, freq="D")
    return list(rng.strftime(canon.DATE_FORMAT))


def days_after(start: str, end: str) -> list[str]:
    """Calendar days in (start, end], as ISO labels."""
    s = parse_date(start)
    e = parse_date(end)
    if e <= s:
        return []
    rng = pd.date_range(s + pd.Timedelta(days=1), e, freq="D")
    return list(rng.strftime(canon.DATE_FORMAT))


def degree_day_frame(daily: Sequence[DailyDegreeDay]) -> pd.DataFrame:
    """
    Columnar view of a daily degree-day series.

    Columns: ['date', 'hdd', 'cdd', 'mean_temp'], one row per input day in the
    input order. 'date' stays a string so ISO range filters compare lexically.
    """
    if len(daily) == 0:
        return pd.DataFrame(
            {
                "date": pd.Series(dtype=object),
                "hdd": pd.Series(dtype=float),
                "cdd": pd.Series(dtype=float),
                "mean_temp": pd.Series(dtype=float),
            }
        )[canon.DAILY_COLS]
    return pd.DataFrame(
        {
            "date": [d.date for d in daily],
            "hdd": np.asarray([d.hdd for d in daily], dtype=float),
            "cdd": np.asarray([d.cdd for d in daily], dtype=float),
            "mean_temp": np.asarray([d.mean_temp for d in daily], dtype=float),
        }
    )[canon.DAILY_COLS]


def hdd_by_date(daily: Iterable[DailyDegreeDay]) -> Dict[str, float]:
    """Map ISO date → HDD; later duplicates win."""
    return {d.date: d.hdd for d in daily}
