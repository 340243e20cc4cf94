"""External routing, road-snapping and elevation providers."""

from .elevation import ElevationClient, ElevationPoint
from .osrm_client import OSRMClient, RouteResponse, get_route, simplify_route, snap_to_nearest_road

__all__ = [
    "ElevationClient",
    "ElevationPoint",
    "OSRMClient",
    "RouteResponse",
    "get_route",
    "simplify_route",
    "snap_to_nearest_road",
]
