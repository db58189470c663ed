from __future__ import annotations
from typing import TypedDict, Literal, List, Optional
from dataclasses import dataclass, field

from pydantic import BaseModel, Field

FuelPurpose = Literal["heating", "cooling", "both", "all"]
InputMode = Literal["delivery", "billing"]
FitQuality = Literal["good", "fair", "poor"]


###
### INPUT RECORDS
###


class DailyTemp(BaseModel):
    """One calendar day of observed or forecast temperature extremes (°F)."""
    date: str  # "YYYY-MM-DD"
    temp_max_f: float
    temp_min_f: float


class BillRecord(BaseModel):
    """A utility bill or a fuel delivery (start_date == end_date)."""
    id: str
    start_date: str = ""  # "YYYY-MM-DD", may be blank while editing
    end_date: str = ""
    quantity: float = 0.0  # native units (gallons, therms, kWh, ...)
    unit: str = ""
    cost: Optional[float] = None
    price_per_unit: Optional[float] = None


class Delivery(BaseModel):
    """A known fill event used to anchor tank history."""
    date: str
    quantity: float


class FuelSource(BaseModel):
    """A fuel the building uses, with its bill or delivery history."""
    id: str
    fuel_type: str
    label: str = ""
    input_mode: InputMode = "billing"
    purpose: FuelPurpose = "heating"
    system_efficiency: Optional[float] = None
    system_capacity_btu: Optional[float] = None
    tank_capacity: Optional[float] = None
    current_tank_level: Optional[float] = None
    delivery_threshold: Optional[float] = None  # level at which to schedule delivery
    bills: list[BillRecord] = Field(default_factory=list)


class FuelReference(BaseModel):
    """Physical and price constants for one fuel type."""
    key: str
    name: str
    unit: str
    unit_plural: str
    btu_per_unit: float
    typical_system_efficiency: float
    co2_lbs_per_mmbtu: float = 0.0
    default_price: float
    input_mode: InputMode = "billing"


###
### DEGREE DAYS
###


@dataclass(frozen=True)
class DailyDegreeDay:
    date: str
    hdd: float
    cdd: float
    mean_temp: float


@dataclass(frozen=True)
class AggregatedDegreeDays:
    hdd: float = 0.0
    cdd: float = 0.0
    days: int = 0


@dataclass(frozen=True)
class AnnualDegreeDays:
    annual_hdd: float = 0.0
    annual_cdd: float = 0.0


@dataclass(frozen=True)
class HddStats:
    mean: float
    std: float  # population standard deviation


###
### REGRESSION
###


@dataclass(frozen=True)
class BillWithDegreeDays:
    bill: BillRecord
    hdd: float
    cdd: float
    days: int
    energy: float  # quantity from the bill


@dataclass(frozen=True)
class RegressionResult:
    beta0: float  # daily base load, units/day
    beta1: Optional[float]  # heating sensitivity, units/HDD
    beta2: Optional[float]  # cooling sensitivity, units/CDD
    r_squared: float
    residuals: List[float]
    fitted_values: List[float]
    observations: List[BillWithDegreeDays]
    annual_base_load: float
    annual_heating_load: float
    annual_cooling_load: float
    annual_total: float


@dataclass(frozen=True)
class QuickEstimate:
    base_load: float
    climate_load: float


###
### TANK FORECAST
###


@dataclass(frozen=True)
class TankLevelPoint:
    date: str
    level: float
    level_low: Optional[float] = None
    level_high: Optional[float] = None
    is_projected: bool = False


@dataclass
class DeliveryForecastResult:
    points: List[TankLevelPoint] = field(default_factory=list)
    estimated_delivery_date: Optional[str] = None
    days_until_delivery: Optional[int] = None


@dataclass
class TankForecast:
    history: List[TankLevelPoint]
    projection: DeliveryForecastResult

    @property
    def points(self) -> List[TankLevelPoint]:
        """Historical points followed by projected points, for charting."""
        return [*self.history, *self.projection.points]


###
### FUEL COMPARISON
###


@dataclass(frozen=True)
class FuelComparisonEntry:
    fuel: FuelReference
    quantity_needed: float
    annual_cost: float
    price_per_unit: float
    is_current: bool


###
### SUMMARY
###


class RegressionSummary(TypedDict):
    annual_total: float
    annual_cost: float
    base_pct: float
    climate_pct: float
    r_squared: float
    fit_quality: FitQuality
    residual_std_error: float
