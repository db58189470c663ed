from __future__ import annotations

from dataclasses import dataclass, field

from . import canon


@dataclass
class DegreeDayConfig:
    heating_base_temp_f: float = canon.DEFAULT_HEATING_BASE_F
    cooling_base_temp_f: float = canon.DEFAULT_COOLING_BASE_F
    years_of_history: int = canon.DEFAULT_YEARS_OF_HISTORY  # weather window to fetch


@dataclass
class ForecastConfig:
    max_days: int = canon.DEFAULT_MAX_DAYS
    # Reorder level as a share of capacity when a source sets no threshold
    threshold_fraction: float = canon.DEFAULT_THRESHOLD_FRACTION


@dataclass
class EngineConfig:
    degree_days: DegreeDayConfig = field(default_factory=DegreeDayConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)


def default_config() -> EngineConfig:
    return EngineConfig()
