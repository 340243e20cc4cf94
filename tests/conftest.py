"""Shared test fixtures: campus locations and demand routes."""

from __future__ import annotations

import pytest

from evsite.models.domain import Location, Route


def _location(location_id: str, lat: float, lng: float, elevation: float = 185.0) -> Location:
    return Location(id=location_id, name=location_id.replace("-", " ").title(), lat=lat, lng=lng, elevation=elevation)


@pytest.fixture
def campus_locations() -> dict[str, Location]:
    return {
        "main-gate": _location("main-gate", 15.387352, 73.875786, 170),
        "academic-block": _location("academic-block", 15.3918, 73.8792, 185),
        "library": _location("library", 15.391583, 73.880444, 188),
        "sports-complex": _location("sports-complex", 15.3905, 73.8808, 175),
        "cafeteria": _location("cafeteria", 15.392803, 73.884299, 186),
    }


@pytest.fixture
def campus_routes(campus_locations) -> list[Route]:
    loc = campus_locations
    return [
        Route(id="route-1", start=loc["main-gate"], end=loc["academic-block"], frequency=10),
        Route(id="route-2", start=loc["academic-block"], end=loc["cafeteria"], frequency=4),
        Route(id="route-3", start=loc["library"], end=loc["sports-complex"], frequency=2),
    ]
