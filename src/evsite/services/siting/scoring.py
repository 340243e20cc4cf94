"""Composite scoring and comparison of station placements."""

from __future__ import annotations

from typing import Optional, Sequence

from ...models.domain import (
    LocationMetrics,
    PlacementScenario,
    Route,
    ScoredScenario,
    StationImprovement,
)
from ..geospatial import HasLatLng, distance_between
from .locator import RoadSnapper, find_optimal_location
from .metrics import ACCEPTABLE_DISTANCE_M, calculate_location_metrics

AVERAGE_DISTANCE_WEIGHT = 0.4
COVERAGE_WEIGHT = 0.3
MAX_DISTANCE_WEIGHT = 0.3
RELOCATION_THRESHOLD_M = 100.0


def calculate_placement_score(metrics: LocationMetrics) -> float:
    """Score a placement on a 0-100 scale; higher is better."""

    average_score = max(0.0, 100 - metrics.average_distance / 10)
    max_score = max(0.0, 100 - metrics.max_distance / 15)
    return (
        average_score * AVERAGE_DISTANCE_WEIGHT
        + metrics.coverage_percentage * COVERAGE_WEIGHT
        + max_score * MAX_DISTANCE_WEIGHT
    )


def compare_station_placements(
    scenarios: Sequence[PlacementScenario],
    routes: Sequence[Route],
    acceptable_distance_m: float = ACCEPTABLE_DISTANCE_M,
) -> list[ScoredScenario]:
    """Score every scenario against the routes, best first. Equal scores keep input order."""

    scored = []
    for scenario in scenarios:
        metrics = calculate_location_metrics(scenario, routes, (), acceptable_distance_m)
        scored.append(ScoredScenario(scenario=scenario, metrics=metrics, score=calculate_placement_score(metrics)))
    return sorted(scored, key=lambda item: item.score, reverse=True)


def suggest_station_improvement(
    existing_station: HasLatLng,
    routes: Sequence[Route],
    snapper: RoadSnapper,
    *,
    relocation_threshold_m: float = RELOCATION_THRESHOLD_M,
    **locator_options,
) -> Optional[StationImprovement]:
    """Compare an existing station with the optimal single site for the same routes."""

    optimal = find_optimal_location(routes, snapper, [existing_station], **locator_options)
    if optimal is None:
        return None

    acceptable = locator_options.get("acceptable_distance_m", ACCEPTABLE_DISTANCE_M)
    current = calculate_location_metrics(existing_station, routes, (), acceptable)
    moved = distance_between(existing_station, optimal)

    return StationImprovement(
        current_metrics=current,
        optimal_location=optimal,
        improvement_distance=moved,
        should_relocate=moved > relocation_threshold_m,
        average_distance_improvement=current.average_distance - optimal.metrics.average_distance,
        coverage_improvement=optimal.metrics.coverage_percentage - current.coverage_percentage,
    )
