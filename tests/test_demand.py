import pytest

from evsite.models.domain import Location, Route
from evsite.services.siting.demand import build_demand_points


def _route(route_id: str, frequency: float) -> Route:
    start = Location(id=f"{route_id}-a", name="A", lat=15.390, lng=73.876)
    end = Location(id=f"{route_id}-b", name="B", lat=15.392, lng=73.880)
    return Route(id=route_id, start=start, end=end, frequency=frequency)


def test_demand_points_include_half_weight_midpoint():
    points = build_demand_points([_route("r1", 6)])

    assert [point.type for point in points] == ["start", "end", "midpoint"]
    assert [point.weight for point in points] == [6, 6, 3]
    midpoint = points[2]
    assert midpoint.lat == pytest.approx(15.391)
    assert midpoint.lng == pytest.approx(73.878)
    assert {point.route_id for point in points} == {"r1"}


def test_demand_points_without_midpoints():
    points = build_demand_points([_route("r1", 2), _route("r2", 5)], include_midpoints=False)

    assert len(points) == 4
    assert all(point.type in ("start", "end") for point in points)


def test_missing_frequency_counts_as_one_trip():
    points = build_demand_points([_route("r1", 0)], include_midpoints=False)

    assert [point.weight for point in points] == [1.0, 1.0]
