"""HTTP client for interacting with OSRM services."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

import httpx

from ...config import settings
from ...models.domain import Coordinate, SnapResult

logger = logging.getLogger(__name__)


class OSRMClient:
    def __init__(
        self,
        base_url: str | None = None,
        profile: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.osrm_base_url
        if not self.base_url:
            raise ValueError("OSRM base URL is not configured.")
        self.base_url = self.base_url.rstrip("/")
        self.profile = profile or settings.osrm_profile
        self.timeout = timeout if timeout is not None else settings.osrm_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.osrm_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.osrm_backoff_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        """Create a fresh client per request so calls can run from worker threads."""
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
            transport=self._transport,
        )

    def _get_json(self, url: str, params: dict[str, Any]) -> dict:
        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(url, params=params)
                    response.raise_for_status()
                    data = response.json()
                    if not isinstance(data, dict):
                        raise ValueError("OSRM returned an unexpected payload.")
                    if data.get("code") != "Ok":
                        raise ValueError(f"OSRM request failed: {data.get('message', data.get('code'))}")
                    return data
                except httpx.TimeoutException as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"OSRM request timed out after {self.max_retries} retries: {e}")
                        raise
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"OSRM timeout, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except (httpx.ConnectError, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise ConnectionError(f"Failed to connect to OSRM service at {self.base_url}: {e}") from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"OSRM network error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries}): {e}")
                    time.sleep(wait_time)
                except httpx.HTTPStatusError as e:
                    # Client errors will not succeed on retry.
                    if e.response.status_code < 500:
                        raise ValueError(f"OSRM rejected the request ({e.response.status_code}).") from e
                    attempt += 1
                    if attempt > self.max_retries:
                        raise
                    time.sleep(self.backoff_seconds * attempt)
        finally:
            client.close()

    def route(self, coordinates: Sequence[tuple[float, float]]) -> dict:
        """Get the driving route through (lat, lon) waypoints with GeoJSON geometry."""
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required for OSRM route.")

        coordinate_str = ";".join(f"{lon},{lat}" for lat, lon in coordinates)
        params = {"overview": "full", "geometries": "geojson", "steps": "false"}
        url = f"{self.base_url}/route/v1/{self.profile}/{coordinate_str}"
        data = self._get_json(url, params)
        if not data.get("routes"):
            raise ValueError("OSRM returned no route.")
        return data

    def nearest(self, lat: float, lon: float, number: int = 1) -> dict:
        """Find the nearest point(s) on the road network."""
        url = f"{self.base_url}/nearest/v1/{self.profile}/{lon},{lat}"
        return self._get_json(url, {"number": number})


def snap_to_nearest_road(
    lat: float,
    lng: float,
    max_radius_m: float | None = None,
    client: OSRMClient | None = None,
) -> SnapResult:
    """Move a free coordinate onto the nearest drivable road.

    Never raises: any failure, or a road farther than ``max_radius_m``, yields the input
    coordinate with ``snapped=False``.
    """
    radius = max_radius_m if max_radius_m is not None else settings.snap_max_radius_m
    try:
        osrm = client or OSRMClient()
        data = osrm.nearest(lat, lng)
        waypoints = data.get("waypoints") or []
        if not waypoints:
            return SnapResult(lat=lat, lng=lng, snapped=False)

        nearest = waypoints[0]
        distance = float(nearest.get("distance", 0.0))
        snapped_lng, snapped_lat = nearest["location"]
        snapped_lat, snapped_lng = float(snapped_lat), float(snapped_lng)
    except (httpx.HTTPError, ConnectionError, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Road snapping failed for ({lat:.6f}, {lng:.6f}): {e}")
        return SnapResult(lat=lat, lng=lng, snapped=False)

    if distance > radius:
        logger.warning(f"Snapped location too far ({distance:.0f}m > {radius:.0f}m), using original")
        return SnapResult(lat=lat, lng=lng, snapped=False)

    return SnapResult(
        lat=snapped_lat,
        lng=snapped_lng,
        snapped=True,
        distance=distance,
        name=nearest.get("name") or "Unnamed road",
    )


@dataclass(slots=True)
class RouteResponse:
    coordinates: list[Coordinate]
    distance: Optional[float]
    duration: Optional[float]
    success: bool
    error: Optional[str] = None
    extra: dict = field(default_factory=dict)


def get_route(start: Coordinate, end: Coordinate, client: OSRMClient | None = None) -> RouteResponse:
    """Road route between two points, falling back to a straight line on failure."""
    try:
        osrm = client or OSRMClient()
        data = osrm.route([(start.lat, start.lng), (end.lat, end.lng)])
        route = data["routes"][0]
        coordinates = [Coordinate(lat=float(lat), lng=float(lon)) for lon, lat in route["geometry"]["coordinates"]]
        distance = float(route["distance"])
        duration = float(route["duration"])
    except (httpx.HTTPError, ConnectionError, ValueError, KeyError, IndexError, TypeError) as e:
        logger.warning(f"Error fetching route from OSRM: {e}")
        return RouteResponse(
            coordinates=[start, end],
            distance=None,
            duration=None,
            success=False,
            error="Failed to fetch route. Using straight line.",
        )

    return RouteResponse(coordinates=coordinates, distance=distance, duration=duration, success=True)


def simplify_route(coordinates: Sequence[Coordinate], max_points: int = 50) -> list[Coordinate]:
    """Sample a path down to roughly ``max_points`` vertices, always keeping the last one."""
    if len(coordinates) <= max_points:
        return list(coordinates)

    step = len(coordinates) // max_points
    simplified = list(coordinates[::step])
    if (len(coordinates) - 1) % step:
        simplified.append(coordinates[-1])
    return simplified


def check_health(base_url: str | None = None) -> bool:
    """Check OSRM availability with a nearest lookup at the campus centre."""
    base = base_url or settings.osrm_base_url
    if not base:
        return False
    try:
        client = OSRMClient(base_url=base, max_retries=0, timeout=5.0)
        data = client.nearest(15.392096, 73.879556)
        return bool(data.get("waypoints"))
    except (httpx.HTTPError, ConnectionError, ValueError, AttributeError):
        return False
