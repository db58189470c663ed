from __future__ import annotations
import logging
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from . import canon, degreedays, exceptions, stats, utils, validate
from .types import (
    BillRecord,
    BillWithDegreeDays,
    DailyDegreeDay,
    QuickEstimate,
    RegressionResult,
)

logger = logging.getLogger(__name__)


class ModelShape(Enum):
    """Degree-day regressors fitted alongside the per-day base load."""

    HEATING = ("hdd",)
    COOLING = ("cdd",)
    DUAL = ("hdd", "cdd")

    @property
    def terms(self) -> Tuple[str, ...]:
        return self.value


_SHAPE_BY_PURPOSE = {
    "heating": ModelShape.HEATING,
    "cooling": ModelShape.COOLING,
    "both": ModelShape.DUAL,
    "all": ModelShape.DUAL,
}


def model_shape(purpose: str) -> ModelShape:
    exceptions.require(
        purpose in _SHAPE_BY_PURPOSE,
        f"Unknown fuel purpose '{purpose}'; expected one of {canon.PURPOSES}.",
        exceptions.RegressionError,
    )
    return _SHAPE_BY_PURPOSE[purpose]


def convert_deliveries_to_intervals(deliveries: Sequence[BillRecord]) -> list[BillRecord]:
    """
    Turn fuel deliveries into consumption intervals.

    Each consecutive pair (prev, curr) becomes one interval from prev's date to
    curr's date carrying curr's quantity: the fuel delivered at curr is what was
    burned since prev. The earliest delivery has no reference point and yields
    no interval.
    """
    ordered = sorted(validate.valid_deliveries(deliveries), key=validate.delivery_date)
    if len(ordered) < canon.MIN_DELIVERIES:
        return []
    return [
        BillRecord(
            id=curr.id,
            start_date=validate.delivery_date(prev),
            end_date=validate.delivery_date(curr),
            quantity=curr.quantity,
            unit=curr.unit,
            cost=curr.cost,
            price_per_unit=curr.price_per_unit,
        )
        for prev, curr in zip(ordered, ordered[1:])
    ]


def _calendar_days(bill: BillRecord) -> int:
    try:
        return degreedays.days_between(bill.start_date, bill.end_date)
    except ValueError:
        return 0


def pair_bills_with_degree_days(
    bills: Sequence[BillRecord],
    daily: Sequence[DailyDegreeDay],
) -> list[BillWithDegreeDays]:
    """Attach [start, end) HDD/CDD totals and a day count to each usable bill."""
    frame = utils.degree_day_frame(daily)
    out: list[BillWithDegreeDays] = []
    for bill in validate.valid_bills(bills):
        agg = degreedays.aggregate_frame(frame, bill.start_date, bill.end_date)
        # fall back to calendar days when the weather series doesn't cover the bill
        days = agg.days or _calendar_days(bill)
        if days <= 0:
            continue
        out.append(
            BillWithDegreeDays(
                bill=bill, hdd=agg.hdd, cdd=agg.cdd, days=days, energy=bill.quantity
            )
        )
    return out


def _solve_normal_equations(
    cols: list[np.ndarray], y: np.ndarray
) -> Optional[Tuple[float, ...]]:
    a = [[stats.dot_product(ci, cj) for cj in cols] for ci in cols]
    b = [stats.dot_product(ci, y) for ci in cols]
    if len(cols) == 2:
        return stats.solve_2x2(a[0][0], a[0][1], a[1][0], a[1][1], b[0], b[1])
    return stats.solve_3x3(a, b)


def run_regression(
    bills: Sequence[BillRecord],
    daily: Sequence[DailyDegreeDay],
    purpose: str,
) -> Optional[RegressionResult]:
    """
    Fit energy = β0·days + β1·HDD (+ β2·CDD) by ordinary least squares.

    heating:  energy = β0·days + β1·HDD
    cooling:  energy = β0·days + β2·CDD
    both/all: energy = β0·days + β1·HDD + β2·CDD

    Returns None when degree days are missing, fewer than three bills qualify,
    or the normal equations are singular. β0 is clamped at zero; the weather
    coefficients are passed through as fitted.
    """
    shape = model_shape(purpose)

    if len(daily) == 0:
        logger.debug("No regression: empty degree-day series.")
        return None

    observations = pair_bills_with_degree_days(bills, daily)
    if len(observations) < canon.MIN_OBSERVATIONS:
        logger.debug(
            "No regression: %d usable observations (need %d).",
            len(observations),
            canon.MIN_OBSERVATIONS,
        )
        return None

    y = np.asarray([o.energy for o in observations], dtype=float)
    x_days = np.asarray([o.days for o in observations], dtype=float)
    x_terms = {
        term: np.asarray([getattr(o, term) for o in observations], dtype=float)
        for term in shape.terms
    }

    solution = _solve_normal_equations([x_days, *x_terms.values()], y)
    if solution is None:
        logger.debug("No regression: singular normal equations (purpose=%s).", purpose)
        return None

    beta0 = max(0.0, float(solution[0]))
    coefs = {term: float(c) for term, c in zip(shape.terms, solution[1:])}

    fitted = beta0 * x_days
    for term, coef in coefs.items():
        fitted = fitted + coef * x_terms[term]
    residuals = y - fitted
    r2 = stats.r_squared(y, fitted)

    annual = degreedays.annual_degree_days(daily)
    annual_base = beta0 * canon.BASE_LOAD_DAYS_PER_YEAR
    annual_heating = coefs["hdd"] * annual.annual_hdd if "hdd" in coefs else 0.0
    annual_cooling = coefs["cdd"] * annual.annual_cdd if "cdd" in coefs else 0.0

    return RegressionResult(
        beta0=beta0,
        beta1=coefs.get("hdd"),
        beta2=coefs.get("cdd"),
        r_squared=r2,
        residuals=[float(v) for v in residuals],
        fitted_values=[float(v) for v in fitted],
        observations=observations,
        annual_base_load=annual_base,
        annual_heating_load=annual_heating,
        annual_cooling_load=annual_cooling,
        annual_total=annual_base + annual_heating + annual_cooling,
    )


def quick_estimate(
    annual_quantity: float,
    annual_hdd: float,
    annual_cdd: float,
    purpose: str,
) -> QuickEstimate:
    """
    Split a known annual quantity into base and weather-driven load without
    bill history: 20% base for single-purpose fuels, 30% for dual-purpose.
    """
    model_shape(purpose)
    base_fraction = canon.QUICK_BASE_FRACTION[purpose]
    return QuickEstimate(
        base_load=annual_quantity * base_fraction,
        climate_load=annual_quantity * (1.0 - base_fraction),
    )


def model_curve(
    result: RegressionResult,
    purpose: str,
    days: int = 30,
    points: int = 50,
) -> pd.DataFrame:
    """
    Modelled energy for a `days`-long period across the observed degree-day range.

    HDD is the x-axis unless the fuel is cooling-only. Energy is floored at 0.
    Columns: ['dd', 'energy'].
    """
    use_hdd = model_shape(purpose) is not ModelShape.COOLING
    observed = [o.hdd if use_hdd else o.cdd for o in result.observations]
    if not observed or points <= 0:
        return pd.DataFrame({"dd": pd.Series(dtype=float), "energy": pd.Series(dtype=float)})
    slope = (result.beta1 if use_hdd else result.beta2) or 0.0
    dd = np.linspace(min(observed), max(observed), points)
    energy = np.maximum(0.0, result.beta0 * days + slope * dd)
    return pd.DataFrame({"dd": dd, "energy": energy})
