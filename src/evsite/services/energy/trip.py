"""Trip-level energy and charging report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Sequence

from ...models.domain import (
    DEFAULT_VEHICLE,
    ChargingPlan,
    Coordinate,
    EnergyBreakdown,
    Location,
    VehicleProfile,
)
from ..geospatial import distance_between
from ..providers.elevation import ElevationPoint
from ..providers.osrm_client import RouteResponse, simplify_route
from .battery import (
    CHARGE_TARGET_PCT,
    DEFAULT_CHARGER_POWER_KW,
    MIN_BATTERY_THRESHOLD_PCT,
    calculate_charging_time,
    calculate_remaining_battery,
)
from .model import (
    EfficiencyRating,
    ProfilePoint,
    calculate_elevation_changes,
    calculate_energy_consumption,
    efficiency_rating,
    prepare_elevation_profile,
)

logger = logging.getLogger(__name__)

RouteProvider = Callable[[Coordinate, Coordinate], RouteResponse]
ElevationProvider = Callable[[Sequence[Coordinate]], list[ElevationPoint]]


@dataclass(slots=True)
class ChargingAdvice:
    needed: bool
    current_battery: Optional[float] = None
    target_battery: Optional[float] = None
    time: Optional[ChargingPlan] = None
    reason: Optional[str] = None


@dataclass(slots=True)
class TripReport:
    start_id: str
    end_id: str
    distance: float
    elevation_gain: float
    elevation_loss: float
    energy: EnergyBreakdown
    efficiency: EfficiencyRating
    battery_current: float
    battery_after_trip: float
    charging: ChargingAdvice
    route_type: Literal["road", "straight"]
    elevation_profile: list[ProfilePoint]
    elevation_estimated: bool
    route_error: Optional[str] = None


def plan_trip(
    start: Location,
    end: Location,
    battery_level: float,
    *,
    route_provider: RouteProvider,
    elevation_provider: ElevationProvider,
    profile: VehicleProfile = DEFAULT_VEHICLE,
    charger_power_kw: float = DEFAULT_CHARGER_POWER_KW,
    min_threshold_pct: float = MIN_BATTERY_THRESHOLD_PCT,
    charge_target_pct: float = CHARGE_TARGET_PCT,
    sample_points: int = 50,
) -> TripReport:
    """Resolve the road path and terrain of a trip and report its energy and battery impact."""

    route = route_provider(start.coordinate, end.coordinate)
    if not route.success:
        logger.warning(f"Route {start.id} -> {end.id} unavailable, using straight line: {route.error}")

    samples = simplify_route(route.coordinates, sample_points)
    elevations = elevation_provider(samples)
    profile_points = prepare_elevation_profile(samples, [point.elevation for point in elevations])
    gain, loss = calculate_elevation_changes([point.elevation for point in profile_points])

    distance = route.distance or distance_between(start, end)
    energy = calculate_energy_consumption(distance, gain, loss, profile)
    battery_after = calculate_remaining_battery(battery_level, energy.total_energy, profile.battery_capacity_kwh)

    charging = ChargingAdvice(needed=False)
    if battery_after < min_threshold_pct and battery_level < charge_target_pct:
        charging = ChargingAdvice(
            needed=True,
            current_battery=battery_level,
            target_battery=charge_target_pct,
            time=calculate_charging_time(
                battery_level, charge_target_pct, charger_power_kw, profile.battery_capacity_kwh
            ),
            reason=(
                f"Battery will drop to {battery_after:.1f}% after this trip "
                f"(below {min_threshold_pct:.0f}% threshold)"
            ),
        )

    return TripReport(
        start_id=start.id,
        end_id=end.id,
        distance=distance,
        elevation_gain=gain,
        elevation_loss=loss,
        energy=energy,
        efficiency=efficiency_rating(gain, distance),
        battery_current=battery_level,
        battery_after_trip=battery_after,
        charging=charging,
        route_type="road" if route.success else "straight",
        elevation_profile=profile_points,
        elevation_estimated=any(point.estimated for point in elevations),
        route_error=route.error,
    )
