"""Accessibility metrics of a candidate station location."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import LocationMetrics, Route, RouteMetric
from ..geospatial import HasLatLng, distance_between
from .demand import route_weight

ACCEPTABLE_DISTANCE_M = 500.0


def calculate_location_metrics(
    location: HasLatLng,
    routes: Sequence[Route],
    existing_stations: Sequence[HasLatLng] = (),
    acceptable_distance_m: float = ACCEPTABLE_DISTANCE_M,
) -> LocationMetrics:
    """Evaluate how well ``location`` serves the routes.

    A route's distance to the station is measured from its nearer endpoint. When existing
    stations are given, ``improvement_vs_existing`` is the percentage reduction in average
    distance relative to the best of them.
    """
    route_metrics = []
    for route in routes:
        frequency = route_weight(route)
        nearest = min(distance_between(route.start, location), distance_between(route.end, location))
        route_metrics.append(
            RouteMetric(
                route_id=route.id,
                route_name=route.label,
                distance_to_station=nearest,
                frequency=frequency,
                weighted_distance=nearest * frequency,
            )
        )

    if not route_metrics:
        return LocationMetrics(
            route_metrics=[],
            average_distance=0.0,
            max_distance=0.0,
            coverage_percentage=0.0,
            total_daily_trips=0.0,
        )

    total_frequency = sum(metric.frequency for metric in route_metrics)
    total_weighted = sum(metric.weighted_distance for metric in route_metrics)
    average_distance = total_weighted / total_frequency
    covered = sum(1 for metric in route_metrics if metric.distance_to_station <= acceptable_distance_m)

    improvement = None
    if existing_stations:
        best_existing = min(
            calculate_location_metrics(station, routes, (), acceptable_distance_m).average_distance
            for station in existing_stations
        )
        if best_existing > 0:
            improvement = (best_existing - average_distance) / best_existing * 100

    return LocationMetrics(
        route_metrics=route_metrics,
        average_distance=average_distance,
        max_distance=max(metric.distance_to_station for metric in route_metrics),
        coverage_percentage=covered / len(route_metrics) * 100,
        total_daily_trips=total_frequency,
        improvement_vs_existing=improvement,
    )
