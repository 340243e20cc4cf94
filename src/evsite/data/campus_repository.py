"""Campus dataset loader: points of interest, charging stations and sample routes."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import settings
from ..models.domain import Location, Route


class UnknownLocationError(ValueError):
    """Raised when a request references a location id missing from the campus dataset."""


@dataclass(slots=True)
class CampusData:
    name: str
    center: Location
    bounds: Optional[tuple[float, float, float, float]]
    locations: tuple[Location, ...]
    stations: tuple[Location, ...]
    routes: tuple[Route, ...]

    def find(self, location_id: str) -> Optional[Location]:
        """Resolve a location or station by id."""
        for location in (*self.locations, *self.stations):
            if location.id == location_id:
                return location
        return None

    def require(self, location_id: str) -> Location:
        location = self.find(location_id)
        if location is None:
            raise UnknownLocationError(f"Unknown campus location '{location_id}'.")
        return location


def _parse_location(row: dict) -> Location:
    try:
        return Location(
            id=str(row["id"]),
            name=str(row.get("name") or row["id"]),
            lat=float(row["lat"]),
            lng=float(row["lng"]),
            elevation=float(row.get("elevation", 0.0)),
            type=row.get("type"),
            power_kw=float(row["power_kw"]) if row.get("power_kw") is not None else None,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid campus location record {row!r}: {exc}") from exc


def load_campus(source: Optional[Path] = None) -> CampusData:
    """Load the campus dataset from the configured JSON file."""

    path = source or settings.data_file
    if not path.exists():
        raise FileNotFoundError(f"Campus data file not found: {path}")

    payload = json.loads(path.read_text(encoding="utf-8"))
    campus = payload.get("campus", {})
    center = campus.get("center", {})
    locations = tuple(_parse_location(row) for row in payload.get("locations", []))
    stations = tuple(_parse_location(row) for row in payload.get("stations", []))
    by_id = {location.id: location for location in (*locations, *stations)}

    routes: list[Route] = []
    for row in payload.get("routes", []):
        start, end = by_id.get(row.get("start")), by_id.get(row.get("end"))
        if start is None or end is None:
            raise ValueError(f"Route '{row.get('id')}' references an unknown location.")
        routes.append(
            Route(
                id=str(row["id"]),
                start=start,
                end=end,
                frequency=float(row.get("frequency", 1)),
                name=row.get("name"),
            )
        )

    bounds = campus.get("bounds")
    return CampusData(
        name=campus.get("name", "Campus"),
        center=Location(
            id="campus-center",
            name="Campus Center",
            lat=float(center.get("lat", 0.0)),
            lng=float(center.get("lng", 0.0)),
            elevation=float(center.get("elevation", 0.0)),
        ),
        bounds=tuple(float(value) for value in bounds) if bounds else None,
        locations=locations,
        stations=stations,
        routes=tuple(routes),
    )
