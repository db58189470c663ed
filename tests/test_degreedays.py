"""Degree-day calculation, aggregation, annualisation and history stats."""

import pandas as pd
import pytest

from fuellogic import degreedays
from fuellogic.types import DailyTemp


def _temps(*rows):
    return [DailyTemp(date=d, temp_max_f=hi, temp_min_f=lo) for d, hi, lo in rows]


def test_mean_at_base_gives_no_degree_days():
    out = degreedays.calculate_daily_degree_days(_temps(("2025-01-01", 70, 60)))
    assert out[0].mean_temp == 65.0
    assert out[0].hdd == 0.0 and out[0].cdd == 0.0


def test_one_row_per_input_same_order():
    temps = _temps(
        ("2025-01-02", 40, 30),
        ("2025-01-01", 90, 80),
        ("2025-01-03", 66, 64),
    )
    out = degreedays.calculate_daily_degree_days(temps)
    assert [d.date for d in out] == ["2025-01-02", "2025-01-01", "2025-01-03"]
    assert out[0].hdd == pytest.approx(30.0) and out[0].cdd == 0.0
    assert out[1].cdd == pytest.approx(20.0) and out[1].hdd == 0.0


def test_never_negative_never_both_positive():
    temps = _temps(*[(f"2025-02-{d:02d}", 30 + 3 * d, 10 + 3 * d) for d in range(1, 28)])
    for d in degreedays.calculate_daily_degree_days(temps):
        assert d.hdd >= 0 and d.cdd >= 0
        assert not (d.hdd > 0 and d.cdd > 0)


def test_custom_bases():
    out = degreedays.calculate_daily_degree_days(
        _temps(("2025-06-01", 70, 60)), heating_base=60, cooling_base=62
    )
    assert out[0].hdd == 0.0
    assert out[0].cdd == pytest.approx(3.0)


def test_empty_input():
    assert degreedays.calculate_daily_degree_days([]) == []


def test_aggregate_single_day_equals_day(winter_daily):
    day = winter_daily[10]
    agg = degreedays.aggregate_degree_days(winter_daily, day.date, "2025-01-12")
    assert agg.days == 1
    assert agg.hdd == day.hdd and agg.cdd == day.cdd


def test_aggregate_is_half_open(flat_daily_90):
    """[start, end) excludes the end date itself."""
    agg = degreedays.aggregate_degree_days(flat_daily_90, "2025-01-01", "2025-02-01")
    assert agg.days == 31
    assert agg.hdd == pytest.approx(620.0)


def test_aggregate_no_match_returns_zeros(flat_daily_90):
    agg = degreedays.aggregate_degree_days(flat_daily_90, "2030-01-01", "2030-02-01")
    assert (agg.hdd, agg.cdd, agg.days) == (0.0, 0.0, 0)
    agg = degreedays.aggregate_degree_days([], "2025-01-01", "2025-02-01")
    assert agg.days == 0


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("2025-01-01", "2025-02-01", 31),
        ("2024-02-01", "2024-03-01", 29),  # leap year
        ("2024-12-15", "2025-01-15", 31),  # year boundary
        ("2025-03-01", "2025-03-01", 0),
        ("2025-03-10", "2025-03-01", -9),
    ],
)
def test_days_between(start, end, expected):
    assert degreedays.days_between(start, end) == expected


def test_days_between_rejects_malformed():
    with pytest.raises(ValueError):
        degreedays.days_between("2025-01-01", "not-a-date")


def test_annual_degree_days_is_normalised_rate(flat_daily_90):
    """90 days at 20 HDD annualise to 20 × 365.25."""
    annual = degreedays.annual_degree_days(flat_daily_90)
    assert annual.annual_hdd == pytest.approx(20.0 * 365.25)
    assert annual.annual_cdd == 0.0


def test_annual_degree_days_empty():
    annual = degreedays.annual_degree_days([])
    assert (annual.annual_hdd, annual.annual_cdd) == (0.0, 0.0)


def test_historical_daily_average_hdd(variable_history_daily):
    """Each calendar day sees 10 (2023) and 30 (2024): mean 20, population std 10."""
    hist = degreedays.historical_daily_average_hdd(variable_history_daily)
    assert hist["01-15"].mean == pytest.approx(20.0)
    assert hist["01-15"].std == pytest.approx(10.0)
    # Feb 29 only exists in 2024
    assert hist["02-29"].mean == pytest.approx(30.0)
    assert hist["02-29"].std == 0.0
    assert len(hist) == 366
    assert next(iter(hist)) == "01-01"


def test_historical_daily_average_hdd_empty():
    assert degreedays.historical_daily_average_hdd([]) == {}


def test_monthly_degree_days_sums_match_daily(winter_daily):
    table = degreedays.monthly_degree_days(winter_daily)
    assert list(table.columns) == ["month", "hdd", "cdd", "mean_temp", "days"]
    assert len(table) == 12
    assert table["month"].iloc[0] == "2025-12"  # newest first
    jan = table.set_index("month").loc["2025-01"]
    assert jan["hdd"] == pytest.approx(31 * 25.0)
    assert jan["days"] == 31
    assert table["hdd"].sum() == pytest.approx(sum(d.hdd for d in winter_daily))


def test_monthly_degree_days_empty():
    table = degreedays.monthly_degree_days([])
    assert isinstance(table, pd.DataFrame) and table.empty
