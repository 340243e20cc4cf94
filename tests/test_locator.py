import numpy as np
import pytest

from evsite.models.domain import Route, SnapResult
from evsite.services.siting.demand import build_demand_points
from evsite.services.siting.locator import find_optimal_location


def _unsnapped(lat, lng, max_radius_m):
    return SnapResult(lat=lat, lng=lng, snapped=False)


def test_empty_routes_return_none():
    assert find_optimal_location([], _unsnapped) is None


@pytest.mark.parametrize("include_midpoints", [True, False])
def test_equal_weights_give_arithmetic_mean(campus_locations, include_midpoints):
    loc = campus_locations
    routes = [
        Route(id="a", start=loc["main-gate"], end=loc["library"], frequency=3),
        Route(id="b", start=loc["cafeteria"], end=loc["sports-complex"], frequency=3),
    ]

    result = find_optimal_location(routes, _unsnapped, include_midpoints=include_midpoints)

    points = build_demand_points(routes, include_midpoints=include_midpoints)
    assert result.original_lat == pytest.approx(np.mean([p.lat for p in points]))
    assert result.original_lng == pytest.approx(np.mean([p.lng for p in points]))


def test_unsnapped_result_keeps_centroid(campus_routes):
    result = find_optimal_location(campus_routes, _unsnapped)

    assert result.method == "weighted_centroid"
    assert result.snapped is False
    assert (result.lat, result.lng) == (result.original_lat, result.original_lng)
    assert result.snap_distance is None
    assert result.road_name is None


def test_snapped_result_moves_to_road(campus_routes):
    calls = []

    def snapper(lat, lng, max_radius_m):
        calls.append((lat, lng, max_radius_m))
        return SnapResult(lat=lat + 0.0002, lng=lng, snapped=True, distance=22.0, name="Ring Road")

    result = find_optimal_location(campus_routes, snapper, max_radius_m=750)

    assert len(calls) == 1
    assert calls[0][2] == 750
    assert result.snapped is True
    assert result.lat == pytest.approx(result.original_lat + 0.0002)
    assert result.snap_distance == 22.0
    assert result.road_name == "Ring Road"


def test_failing_snapper_falls_back_to_centroid(campus_routes):
    def broken(lat, lng, max_radius_m):
        raise ConnectionError("network down")

    result = find_optimal_location(campus_routes, broken)

    assert result.snapped is False
    assert result.lat == result.original_lat


def test_heavier_route_pulls_centroid(campus_locations):
    loc = campus_locations
    light = Route(id="light", start=loc["main-gate"], end=loc["main-gate"], frequency=1)
    heavy = Route(id="heavy", start=loc["cafeteria"], end=loc["cafeteria"], frequency=9)

    result = find_optimal_location([light, heavy], _unsnapped)

    expected_lat = (loc["main-gate"].lat * 1 + loc["cafeteria"].lat * 9) / 10
    assert result.original_lat == pytest.approx(expected_lat)


def test_existing_stations_and_campus_flag(campus_routes, campus_locations):
    bounds = (15.3865, 73.875, 15.394, 73.885)

    result = find_optimal_location(
        campus_routes, _unsnapped, [campus_locations["cafeteria"]], campus_bounds=bounds
    )

    assert result.metrics.improvement_vs_existing is not None
    assert result.within_campus is True
