"""Station siting orchestration service."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Sequence

from ...config import settings
from ...data.campus_repository import CampusData, load_campus
from ...models.domain import Coordinate, PlacementScenario, Route, SnapResult
from ...schemas.siting import (
    CampusResponse,
    CompareRequest,
    LocationMetricsModel,
    LocationModel,
    MetricsRequest,
    OptimalLocationModel,
    OptimizeRequest,
    OptimizeResponse,
    RouteInput,
    ScoredScenarioModel,
    StationImprovementModel,
    SuggestImprovementRequest,
)
from ..providers.osrm_client import snap_to_nearest_road
from .clustering import MultiStationClusterer
from .locator import find_optimal_location
from .metrics import calculate_location_metrics
from .scoring import compare_station_placements, suggest_station_improvement

logger = logging.getLogger(__name__)


def road_snapper(lat: float, lng: float, max_radius_m: float) -> SnapResult:
    return snap_to_nearest_road(lat, lng, max_radius_m)


def _resolve_routes(campus: CampusData, inputs: Sequence[RouteInput] | None) -> list[Route]:
    if inputs is None:
        return list(campus.routes)
    return [
        Route(
            id=item.id or f"route-{index}",
            start=campus.require(item.start_id),
            end=campus.require(item.end_id),
            frequency=item.frequency,
            name=item.name,
        )
        for index, item in enumerate(inputs, start=1)
    ]


def describe_campus() -> CampusResponse:
    campus = load_campus()
    return CampusResponse(
        name=campus.name,
        center=LocationModel(**asdict(campus.center)),
        bounds=list(campus.bounds) if campus.bounds else None,
        locations=[LocationModel(**asdict(location)) for location in campus.locations],
        stations=[LocationModel(**asdict(station)) for station in campus.stations],
        routes=[
            RouteInput(
                id=route.id,
                start_id=route.start.id,
                end_id=route.end.id,
                frequency=route.frequency,
                name=route.name,
            )
            for route in campus.routes
        ],
    )


def optimize_station_locations(payload: OptimizeRequest) -> OptimizeResponse:
    campus = load_campus()
    routes = _resolve_routes(campus, payload.routes)
    if not routes:
        raise ValueError("At least one route is required to site a charging station.")

    if payload.num_stations == 1:
        if payload.existing_station_ids is None:
            existing = list(campus.stations)
        else:
            existing = [campus.require(station_id) for station_id in payload.existing_station_ids]
        include_midpoints = True if payload.include_midpoints is None else payload.include_midpoints
        result = find_optimal_location(
            routes,
            road_snapper,
            existing,
            max_radius_m=settings.snap_max_radius_m,
            include_midpoints=include_midpoints,
            acceptable_distance_m=settings.acceptable_distance_m,
            campus_bounds=campus.bounds,
        )
        results = [result] if result is not None else []
        metadata = {"method": "weighted_centroid", "include_midpoints": include_midpoints}
    else:
        include_midpoints = False if payload.include_midpoints is None else payload.include_midpoints
        clusterer = MultiStationClusterer(
            max_iterations=settings.cluster_max_iterations,
            tolerance_m=settings.cluster_tolerance_m,
            seeding=payload.seeding or settings.cluster_seeding,
            random_state=payload.random_state if payload.random_state is not None else settings.cluster_random_state,
            include_midpoints=include_midpoints,
            max_parallel_snaps=settings.max_parallel_snaps,
        )
        results = clusterer.locate(
            routes,
            payload.num_stations,
            road_snapper,
            max_radius_m=settings.snap_max_radius_m,
            acceptable_distance_m=settings.acceptable_distance_m,
            campus_bounds=campus.bounds,
        )
        metadata = {
            "method": "weighted_kmeans",
            "include_midpoints": include_midpoints,
            "seeding": clusterer.seeding,
            "random_state": clusterer.random_state,
        }

    metadata["route_count"] = len(routes)
    metadata["snapped_count"] = sum(1 for result in results if result.snapped)
    logger.info(f"Sited {len(results)} station(s) for {len(routes)} route(s)")
    return OptimizeResponse(
        num_stations=payload.num_stations,
        locations=[OptimalLocationModel(**asdict(result)) for result in results],
        metadata=metadata,
    )


def evaluate_location(payload: MetricsRequest) -> LocationMetricsModel:
    campus = load_campus()
    routes = _resolve_routes(campus, payload.routes)
    existing = [campus.require(station_id) for station_id in payload.existing_station_ids]
    metrics = calculate_location_metrics(
        Coordinate(payload.location.lat, payload.location.lng),
        routes,
        existing,
        settings.acceptable_distance_m,
    )
    return LocationMetricsModel(**asdict(metrics))


def compare_placements(payload: CompareRequest) -> list[ScoredScenarioModel]:
    campus = load_campus()
    routes = _resolve_routes(campus, payload.routes)
    scenarios = [PlacementScenario(id=item.id, name=item.name, lat=item.lat, lng=item.lng) for item in payload.scenarios]
    ranked = compare_station_placements(scenarios, routes, settings.acceptable_distance_m)
    return [ScoredScenarioModel(**asdict(item)) for item in ranked]


def suggest_improvement(payload: SuggestImprovementRequest) -> StationImprovementModel:
    campus = load_campus()
    routes = _resolve_routes(campus, payload.routes)
    if payload.station_id:
        station = campus.require(payload.station_id)
    elif campus.stations:
        station = campus.stations[0]
    else:
        raise ValueError("No charging station configured for this campus.")

    suggestion = suggest_station_improvement(
        station,
        routes,
        road_snapper,
        relocation_threshold_m=settings.relocation_threshold_m,
        max_radius_m=settings.snap_max_radius_m,
        acceptable_distance_m=settings.acceptable_distance_m,
        campus_bounds=campus.bounds,
    )
    if suggestion is None:
        raise ValueError("At least one route is required to suggest a station improvement.")
    return StationImprovementModel(**asdict(suggestion))
