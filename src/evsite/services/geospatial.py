"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Protocol, Sequence

import numpy as np
from shapely.geometry import Point, box

EARTH_RADIUS_M = 6_371_000.0


class HasLatLng(Protocol):
    lat: float
    lng: float


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in metres between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_between(a: HasLatLng, b: HasLatLng) -> float:
    """Great-circle distance in metres between two objects exposing ``lat``/``lng``."""

    return haversine_m(a.lat, a.lng, b.lat, b.lng)


def midpoint(a: HasLatLng, b: HasLatLng) -> tuple[float, float]:
    """Arithmetic midpoint in degrees; adequate at campus scale."""

    return (a.lat + b.lat) / 2, (a.lng + b.lng) / 2


def weighted_centroid(points: Sequence[tuple[float, float, float]]) -> tuple[float, float]:
    """Return the weight-averaged (lat, lng) of ``(lat, lng, weight)`` triples."""

    if not points:
        raise ValueError("At least one point is required for a centroid.")
    data = np.asarray(points, dtype=float)
    weights = data[:, 2]
    if weights.sum() <= 0:
        raise ValueError("Total weight must be positive.")
    lat = float(np.average(data[:, 0], weights=weights))
    lng = float(np.average(data[:, 1], weights=weights))
    return lat, lng


def cumulative_distances_m(path: Sequence[HasLatLng]) -> list[float]:
    """Running Haversine distance along a path, starting at 0."""

    distances = [0.0]
    for previous, current in zip(path, path[1:]):
        distances.append(distances[-1] + distance_between(previous, current))
    return distances


def to_local_xy(lat: np.ndarray, lng: np.ndarray, lat_ref: float, lng_ref: float) -> np.ndarray:
    """Project degrees onto an equirectangular plane (metres) centred on the reference point.

    Good approximation for small areas such as a campus.
    """
    lat_ref_rad = np.radians(lat_ref)
    x = EARTH_RADIUS_M * (np.radians(lng) - np.radians(lng_ref)) * np.cos(lat_ref_rad)
    y = EARTH_RADIUS_M * (np.radians(lat) - lat_ref_rad)
    return np.column_stack([x, y])


def within_bounds(lat: float, lng: float, bounds: Sequence[float]) -> bool:
    """Return True if the point lies inside ``(min_lat, min_lng, max_lat, max_lng)``."""

    min_lat, min_lng, max_lat, max_lng = bounds
    area = box(min_lng, min_lat, max_lng, max_lat)
    return area.covers(Point(lng, lat))
