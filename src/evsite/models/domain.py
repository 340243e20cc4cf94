"""Domain models for campus locations, demand routes and siting results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

PointType = Literal["start", "end", "midpoint"]


@dataclass(frozen=True, slots=True)
class Coordinate:
    """WGS84 position in decimal degrees."""

    lat: float
    lng: float


@dataclass(slots=True)
class Location:
    """Campus point of interest or charging station."""

    id: str
    name: str
    lat: float
    lng: float
    elevation: float = 0.0
    type: Optional[str] = None
    power_kw: Optional[float] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.lat, self.lng)


@dataclass(slots=True)
class Route:
    """Recurring trip pattern between two campus locations; frequency is trips per day."""

    id: str
    start: Location
    end: Location
    frequency: float = 1.0
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or f"{self.start.name} to {self.end.name}"


@dataclass(frozen=True, slots=True)
class WeightedPoint:
    lat: float
    lng: float
    weight: float
    type: PointType
    route_id: str


@dataclass(slots=True)
class Cluster:
    lat: float
    lng: float
    points: List[WeightedPoint] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class VehicleProfile:
    """Physical constants of one vehicle type."""

    name: str = "Mid-size EV"
    mass_kg: float = 1800.0
    gravity: float = 9.81
    air_density: float = 1.225
    rolling_resistance: float = 0.01
    drag_coefficient: float = 0.28
    frontal_area_m2: float = 2.3
    motor_efficiency: float = 0.90
    regenerative_efficiency: float = 0.70
    average_speed_kmh: float = 40.0
    battery_capacity_kwh: float = 60.0


DEFAULT_VEHICLE = VehicleProfile()


@dataclass(slots=True)
class EnergyBreakdown:
    total_energy: float
    rolling_resistance: float
    air_resistance: float
    uphill_energy: float
    regenerated_energy: float
    distance_km: float
    estimated_time: float


@dataclass(slots=True)
class ChargingPlan:
    hours: int
    minutes: int
    total_minutes: int
    energy_needed: float


@dataclass(slots=True)
class ChargingInterval:
    before_trip: int
    current_battery: float
    charge_to: float
    charging_time: ChargingPlan
    reason: str


@dataclass(slots=True)
class ChargingSchedule:
    intervals: List[ChargingInterval]
    final_battery: float


@dataclass(slots=True)
class SnapResult:
    lat: float
    lng: float
    snapped: bool
    distance: Optional[float] = None
    name: Optional[str] = None


@dataclass(slots=True)
class RouteMetric:
    route_id: str
    route_name: str
    distance_to_station: float
    frequency: float
    weighted_distance: float


@dataclass(slots=True)
class LocationMetrics:
    route_metrics: List[RouteMetric]
    average_distance: float
    max_distance: float
    coverage_percentage: float
    total_daily_trips: float
    improvement_vs_existing: Optional[float] = None


@dataclass(slots=True)
class OptimalLocationResult:
    lat: float
    lng: float
    original_lat: float
    original_lng: float
    snapped: bool
    snap_distance: Optional[float]
    road_name: Optional[str]
    metrics: LocationMetrics
    method: str
    id: Optional[str] = None
    assigned_routes: List[str] = field(default_factory=list)
    within_campus: Optional[bool] = None


@dataclass(slots=True)
class PlacementScenario:
    id: str
    name: str
    lat: float
    lng: float


@dataclass(slots=True)
class ScoredScenario:
    scenario: PlacementScenario
    metrics: LocationMetrics
    score: float


@dataclass(slots=True)
class StationImprovement:
    current_metrics: LocationMetrics
    optimal_location: OptimalLocationResult
    improvement_distance: float
    should_relocate: bool
    average_distance_improvement: float
    coverage_improvement: float
