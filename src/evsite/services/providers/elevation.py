"""Elevation lookups against an Open-Elevation compatible API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import httpx

from ...config import settings
from ...models.domain import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ElevationPoint:
    lat: float
    lng: float
    elevation: float
    estimated: bool


class ElevationClient:
    """Batching elevation client; failed batches fall back to a default elevation."""

    def __init__(
        self,
        url: str | None = None,
        batch_size: int | None = None,
        default_elevation: float | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url or settings.elevation_api_url
        self.batch_size = batch_size or settings.elevation_batch_size
        self.default_elevation = (
            default_elevation if default_elevation is not None else settings.default_elevation_m
        )
        self.timeout = timeout if timeout is not None else settings.elevation_timeout_seconds
        self._transport = transport

    def _estimated(self, coordinates: Sequence[Coordinate]) -> list[ElevationPoint]:
        return [
            ElevationPoint(lat=coord.lat, lng=coord.lng, elevation=self.default_elevation, estimated=True)
            for coord in coordinates
        ]

    def _fetch_batch(self, client: httpx.Client, batch: Sequence[Coordinate]) -> list[ElevationPoint]:
        locations = "|".join(f"{coord.lat},{coord.lng}" for coord in batch)
        try:
            response = client.get(self.url, params={"locations": locations})
            response.raise_for_status()
            results = response.json()["results"]
            if len(results) != len(batch):
                raise ValueError(f"Expected {len(batch)} elevations, got {len(results)}")
            return [
                ElevationPoint(lat=coord.lat, lng=coord.lng, elevation=float(result["elevation"]), estimated=False)
                for coord, result in zip(batch, results)
            ]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Elevation lookup failed for batch of {len(batch)} points, using default: {e}")
            return self._estimated(batch)

    def lookup(self, coordinates: Sequence[Coordinate]) -> list[ElevationPoint]:
        """Annotate coordinates with elevation (metres). Never raises."""
        if not coordinates:
            return []
        results: list[ElevationPoint] = []
        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            for start in range(0, len(coordinates), self.batch_size):
                results.extend(self._fetch_batch(client, coordinates[start : start + self.batch_size]))
        return results

    def lookup_point(self, lat: float, lng: float) -> ElevationPoint:
        return self.lookup([Coordinate(lat, lng)])[0]
