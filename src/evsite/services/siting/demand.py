"""Demand points derived from recurring routes."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Route, WeightedPoint
from ..geospatial import midpoint

MIDPOINT_WEIGHT_FACTOR = 0.5


def route_weight(route: Route) -> float:
    # Missing or zero frequency counts as one trip per day.
    return route.frequency or 1.0


def build_demand_points(routes: Sequence[Route], include_midpoints: bool = True) -> list[WeightedPoint]:
    """Expand routes into weighted start/end points and, optionally, half-weight midpoints."""

    points: list[WeightedPoint] = []
    for route in routes:
        weight = route_weight(route)
        points.append(WeightedPoint(route.start.lat, route.start.lng, weight, "start", route.id))
        points.append(WeightedPoint(route.end.lat, route.end.lng, weight, "end", route.id))
        if include_midpoints:
            mid_lat, mid_lng = midpoint(route.start, route.end)
            points.append(
                WeightedPoint(mid_lat, mid_lng, weight * MIDPOINT_WEIGHT_FACTOR, "midpoint", route.id)
            )
    return points
