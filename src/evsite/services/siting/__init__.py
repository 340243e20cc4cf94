"""Charging station siting services."""

from .clustering import MultiStationClusterer
from .demand import build_demand_points
from .locator import find_optimal_location
from .metrics import calculate_location_metrics
from .scoring import calculate_placement_score, compare_station_placements, suggest_station_improvement

__all__ = [
    "MultiStationClusterer",
    "build_demand_points",
    "find_optimal_location",
    "calculate_location_metrics",
    "calculate_placement_score",
    "compare_station_placements",
    "suggest_station_improvement",
]
