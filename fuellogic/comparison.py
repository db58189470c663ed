from __future__ import annotations
from typing import Mapping, Optional, Sequence, Tuple

from . import exceptions
from .types import FuelComparisonEntry, FuelReference


def calculate_heat_demand_btu(
    annual_heating_load: float,
    fuel: FuelReference,
    efficiency: Optional[float] = None,
) -> float:
    """Delivered heat (BTU/yr) from an annual heating load in the fuel's units."""
    eff = efficiency if efficiency is not None else fuel.typical_system_efficiency
    return annual_heating_load * fuel.btu_per_unit * eff


def compare_fuel_costs(
    annual_heat_demand_btu: float,
    fuels: Sequence[FuelReference],
    current_fuel_key: Optional[str] = None,
    price_overrides: Optional[Mapping[str, float]] = None,
    efficiency_overrides: Optional[Mapping[str, float]] = None,
) -> list[FuelComparisonEntry]:
    """
    Annual quantity and cost of meeting the same heat demand with each fuel,
    cheapest first. Overrides are keyed by fuel key.
    """
    prices = price_overrides or {}
    effs = efficiency_overrides or {}
    entries: list[FuelComparisonEntry] = []
    for fuel in fuels:
        price = prices.get(fuel.key, fuel.default_price)
        efficiency = effs.get(fuel.key, fuel.typical_system_efficiency)
        delivered_per_unit = fuel.btu_per_unit * efficiency
        exceptions.require(
            delivered_per_unit > 0,
            f"Fuel '{fuel.key}' has non-positive delivered BTU per unit.",
            exceptions.ComparisonError,
        )
        quantity = annual_heat_demand_btu / delivered_per_unit
        entries.append(
            FuelComparisonEntry(
                fuel=fuel,
                quantity_needed=quantity,
                annual_cost=quantity * price,
                price_per_unit=price,
                is_current=fuel.key == current_fuel_key,
            )
        )
    return sorted(entries, key=lambda e: e.annual_cost)


def savings_vs_cheapest(
    entries: Sequence[FuelComparisonEntry],
) -> Optional[Tuple[FuelComparisonEntry, FuelComparisonEntry, float]]:
    """(current, cheapest alternative, annual savings), or None if nothing is cheaper."""
    current = next((e for e in entries if e.is_current), None)
    if current is None:
        return None
    alternatives = [e for e in entries if not e.is_current and e.annual_cost > 0]
    if not alternatives:
        return None
    cheapest = min(alternatives, key=lambda e: e.annual_cost)
    savings = current.annual_cost - cheapest.annual_cost
    if savings <= 0:
        return None
    return current, cheapest, savings
