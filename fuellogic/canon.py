from __future__ import annotations
from typing import Final, Dict, Tuple

DEFAULT_HEATING_BASE_F: Final[float] = 65.0
DEFAULT_COOLING_BASE_F: Final[float] = 65.0
DEFAULT_YEARS_OF_HISTORY: Final[int] = 3

DAYS_PER_YEAR: Final[float] = 365.25
BASE_LOAD_DAYS_PER_YEAR: Final[int] = 365
SINGULAR_EPS: Final[float] = 1e-12

MIN_OBSERVATIONS: Final[int] = 3
MIN_DELIVERIES: Final[int] = 2

DEFAULT_MAX_DAYS: Final[int] = 120
DEFAULT_THRESHOLD_FRACTION: Final[float] = 0.25

DATE_FORMAT: Final[str] = "%Y-%m-%d"
DAILY_COLS: Final[list[str]] = ["date", "hdd", "cdd", "mean_temp"]

PURPOSES: Final[Tuple[str, ...]] = ("heating", "cooling", "both", "all")

# Share of an annual quantity attributed to base load by the quick estimate
QUICK_BASE_FRACTION: Final[Dict[str, float]] = {
    "heating": 0.20,
    "cooling": 0.20,
    "both": 0.30,
    "all": 0.30,
}

# R² cut-offs for fit quality labels, best first
FIT_QUALITY: Final[Tuple[Tuple[float, str], ...]] = (
    (0.85, "good"),
    (0.65, "fair"),
)
