import pandas as pd
import pytest

from fuellogic.types import DailyDegreeDay, FuelReference


def _series(start, periods, hdd_fn, cdd_fn=lambda ts: 0.0):
    rng = pd.date_range(start, periods=periods, freq="D")
    out = []
    for ts in rng:
        hdd = float(hdd_fn(ts))
        cdd = float(cdd_fn(ts))
        out.append(
            DailyDegreeDay(
                date=ts.strftime("%Y-%m-%d"), hdd=hdd, cdd=cdd, mean_temp=65.0 - hdd + cdd
            )
        )
    return out


@pytest.fixture
def flat_daily_90():
    """Jan 1 – Mar 31 2025, a constant 20 HDD per day."""
    return _series("2025-01-01", 90, lambda ts: 20.0)


@pytest.fixture
def winter_daily():
    """2025, 25 HDD/day Nov–Mar, 0 otherwise; no cooling."""
    return _series(
        "2025-01-01", 365, lambda ts: 25.0 if ts.month >= 11 or ts.month <= 3 else 0.0
    )


@pytest.fixture
def dual_daily():
    """2025, 25 HDD/day Nov–Mar and 10 CDD/day Jun–Aug."""
    return _series(
        "2025-01-01",
        365,
        lambda ts: 25.0 if ts.month >= 11 or ts.month <= 3 else 0.0,
        lambda ts: 10.0 if 6 <= ts.month <= 8 else 0.0,
    )


@pytest.fixture
def history_daily():
    """2024, a constant 20 HDD per day (zero spread per calendar day)."""
    return _series("2024-01-01", 366, lambda ts: 20.0)


@pytest.fixture
def variable_history_daily():
    """2023 at 10 HDD/day and 2024 at 30 HDD/day: mean 20, std 10 per calendar day."""
    return _series("2023-01-01", 731, lambda ts: 10.0 if ts.year == 2023 else 30.0)


@pytest.fixture
def fuel_refs():
    return [
        FuelReference(
            key="oil_2",
            name="Heating Oil #2",
            unit="gallon",
            unit_plural="gallons",
            btu_per_unit=138_500,
            typical_system_efficiency=0.83,
            co2_lbs_per_mmbtu=163.5,
            default_price=3.95,
            input_mode="delivery",
        ),
        FuelReference(
            key="propane",
            name="Propane",
            unit="gallon",
            unit_plural="gallons",
            btu_per_unit=91_500,
            typical_system_efficiency=0.85,
            co2_lbs_per_mmbtu=139.0,
            default_price=2.89,
            input_mode="delivery",
        ),
        FuelReference(
            key="natural_gas",
            name="Natural Gas",
            unit="therm",
            unit_plural="therms",
            btu_per_unit=100_000,
            typical_system_efficiency=0.90,
            co2_lbs_per_mmbtu=117.0,
            default_price=1.60,
            input_mode="billing",
        ),
        FuelReference(
            key="electricity_heat_pump",
            name="Heat Pump",
            unit="kWh",
            unit_plural="kWh",
            btu_per_unit=3_412,
            typical_system_efficiency=2.5,
            co2_lbs_per_mmbtu=0.0,
            default_price=0.17,
            input_mode="billing",
        ),
    ]
