"""Physics-based EV energy consumption model.

Energy terms, all in joules before conversion to kWh:

- rolling resistance  m * g * Crr * d
- aerodynamic drag    0.5 * rho * Cd * A * v^2 * d
- climbing            m * g * gain
- regeneration        m * g * loss * regen_efficiency (recovered)

Net traction energy is divided by motor efficiency and clamped at zero. Regeneration that
exceeds the trip's own consumption is discarded rather than credited to the battery.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...models.domain import DEFAULT_VEHICLE, EnergyBreakdown, VehicleProfile
from ..geospatial import HasLatLng, cumulative_distances_m

JOULES_PER_KWH = 3.6e6


def calculate_energy_consumption(
    distance_m: float,
    elevation_gain_m: float,
    elevation_loss_m: float,
    profile: VehicleProfile = DEFAULT_VEHICLE,
) -> EnergyBreakdown:
    """Convert a trip's distance and elevation change into an energy breakdown."""

    distance_km = distance_m / 1000
    speed_ms = profile.average_speed_kmh * 1000 / 3600
    weight_n = profile.mass_kg * profile.gravity

    rolling_j = weight_n * profile.rolling_resistance * distance_m
    drag_j = (
        0.5
        * profile.air_density
        * profile.drag_coefficient
        * profile.frontal_area_m2
        * speed_ms**2
        * distance_m
    )
    uphill_j = weight_n * elevation_gain_m
    recovered_j = weight_n * elevation_loss_m * profile.regenerative_efficiency

    total_j = (rolling_j + drag_j + uphill_j - recovered_j) / profile.motor_efficiency

    return EnergyBreakdown(
        total_energy=max(0.0, total_j / JOULES_PER_KWH),
        rolling_resistance=rolling_j / JOULES_PER_KWH,
        air_resistance=drag_j / JOULES_PER_KWH,
        uphill_energy=uphill_j / JOULES_PER_KWH,
        regenerated_energy=recovered_j / JOULES_PER_KWH,
        distance_km=distance_km,
        estimated_time=(distance_km / profile.average_speed_kmh) * 60,
    )


def calculate_elevation_changes(elevations: Sequence[float]) -> tuple[float, float]:
    """Sum climbs and descents between consecutive elevation samples into (gain, loss)."""

    gain = 0.0
    loss = 0.0
    for previous, current in zip(elevations, elevations[1:]):
        diff = current - previous
        if diff > 0:
            gain += diff
        else:
            loss += -diff
    return gain, loss


@dataclass(frozen=True, slots=True)
class EfficiencyRating:
    rating: str
    color: str
    efficiency: int


_RATING_BANDS: tuple[tuple[float, EfficiencyRating], ...] = (
    (2.0, EfficiencyRating("Excellent", "green", 95)),
    (4.0, EfficiencyRating("Good", "lime", 85)),
    (6.0, EfficiencyRating("Moderate", "yellow", 75)),
    (8.0, EfficiencyRating("Poor", "orange", 65)),
)
_WORST_RATING = EfficiencyRating("Very Poor", "red", 55)


def efficiency_rating(elevation_gain_m: float, distance_m: float) -> EfficiencyRating:
    """Grade a route by its average climbing gradient (percent)."""

    if distance_m <= 0:
        return _RATING_BANDS[0][1]
    gradient = elevation_gain_m / distance_m * 100
    for upper, rating in _RATING_BANDS:
        if gradient < upper:
            return rating
    return _WORST_RATING


@dataclass(frozen=True, slots=True)
class ProfilePoint:
    distance_km: float
    elevation: float
    lat: float
    lng: float


def prepare_elevation_profile(path: Sequence[HasLatLng], elevations: Sequence[float]) -> list[ProfilePoint]:
    """Pair each path vertex with its cumulative distance (km) and elevation."""

    if len(path) != len(elevations):
        raise ValueError("Path and elevation samples must have the same length.")
    distances = cumulative_distances_m(path)
    return [
        ProfilePoint(distance_km=dist / 1000, elevation=elev, lat=point.lat, lng=point.lng)
        for point, elev, dist in zip(path, elevations, distances)
    ]
