"""Single-station siting by frequency-weighted centroid."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ...models.domain import Coordinate, OptimalLocationResult, Route, SnapResult
from ..geospatial import HasLatLng, weighted_centroid, within_bounds
from .demand import build_demand_points
from .metrics import ACCEPTABLE_DISTANCE_M, calculate_location_metrics

DEFAULT_SNAP_RADIUS_M = 1000.0

RoadSnapper = Callable[[float, float, float], SnapResult]

logger = logging.getLogger(__name__)


def safe_snap(snapper: RoadSnapper, lat: float, lng: float, max_radius_m: float) -> SnapResult:
    """Call the snapper; a failing snapper leaves the point unsnapped."""
    try:
        return snapper(lat, lng, max_radius_m)
    except Exception as e:
        logger.warning(f"Road snapper raised for ({lat:.6f}, {lng:.6f}), keeping solver output: {e}")
        return SnapResult(lat=lat, lng=lng, snapped=False)


def build_location_result(
    centre: tuple[float, float],
    snap: SnapResult,
    routes: Sequence[Route],
    *,
    method: str,
    existing_stations: Sequence[HasLatLng] = (),
    acceptable_distance_m: float = ACCEPTABLE_DISTANCE_M,
    campus_bounds: Optional[Sequence[float]] = None,
    result_id: Optional[str] = None,
    assigned_routes: Sequence[str] = (),
) -> OptimalLocationResult:
    """Combine a solver centre with its snap outcome and score the final site."""
    original_lat, original_lng = centre
    lat = snap.lat if snap.snapped else original_lat
    lng = snap.lng if snap.snapped else original_lng

    metrics = calculate_location_metrics(Coordinate(lat, lng), routes, existing_stations, acceptable_distance_m)

    return OptimalLocationResult(
        lat=lat,
        lng=lng,
        original_lat=original_lat,
        original_lng=original_lng,
        snapped=snap.snapped,
        snap_distance=snap.distance if snap.snapped else None,
        road_name=snap.name if snap.snapped else None,
        metrics=metrics,
        method=method,
        id=result_id,
        assigned_routes=list(assigned_routes),
        within_campus=within_bounds(lat, lng, campus_bounds) if campus_bounds else None,
    )


def find_optimal_location(
    routes: Sequence[Route],
    snapper: RoadSnapper,
    existing_stations: Sequence[HasLatLng] = (),
    *,
    max_radius_m: float = DEFAULT_SNAP_RADIUS_M,
    include_midpoints: bool = True,
    acceptable_distance_m: float = ACCEPTABLE_DISTANCE_M,
    campus_bounds: Optional[Sequence[float]] = None,
) -> Optional[OptimalLocationResult]:
    """Place one station at the demand-weighted centroid of the routes, snapped to a road.

    Returns ``None`` when there are no routes.
    """
    if not routes:
        return None

    points = build_demand_points(routes, include_midpoints=include_midpoints)
    centre = weighted_centroid([(point.lat, point.lng, point.weight) for point in points])

    snap = safe_snap(snapper, centre[0], centre[1], max_radius_m)
    if not snap.snapped:
        logger.info(f"Using unsnapped centroid ({centre[0]:.6f}, {centre[1]:.6f})")

    return build_location_result(
        centre,
        snap,
        routes,
        method="weighted_centroid",
        existing_stations=existing_stations,
        acceptable_distance_m=acceptable_distance_m,
        campus_bounds=campus_bounds,
    )
