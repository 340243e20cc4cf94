"""Station siting request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CoordinateModel(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class LocationModel(BaseModel):
    id: str
    name: str
    lat: float
    lng: float
    elevation: float = 0.0
    type: Optional[str] = None
    power_kw: Optional[float] = None


class RouteInput(BaseModel):
    id: Optional[str] = Field(default=None, description="Defaults to 'route-N' by position.")
    start_id: str = Field(..., description="Campus location or station id.")
    end_id: str = Field(..., description="Campus location or station id.")
    frequency: float = Field(1.0, ge=1, description="Trips per day.")
    name: Optional[str] = None


class OptimizeRequest(BaseModel):
    routes: Optional[List[RouteInput]] = Field(
        default=None, description="Demand routes. Defaults to the campus sample routes."
    )
    num_stations: int = Field(1, ge=1, le=20)
    existing_station_ids: Optional[List[str]] = Field(
        default=None,
        description="Stations to compare against (single-station mode). Defaults to all campus stations.",
    )
    include_midpoints: Optional[bool] = Field(
        default=None,
        description="Add half-weight route midpoints to the demand. Defaults to True for one station, False for several.",
    )
    seeding: Optional[Literal["kmeans++", "random"]] = None
    random_state: Optional[int] = None


class RouteMetricModel(BaseModel):
    route_id: str
    route_name: str
    distance_to_station: float
    frequency: float
    weighted_distance: float


class LocationMetricsModel(BaseModel):
    route_metrics: List[RouteMetricModel]
    average_distance: float
    max_distance: float
    coverage_percentage: float = Field(..., ge=0, le=100)
    total_daily_trips: float
    improvement_vs_existing: Optional[float] = None


class OptimalLocationModel(BaseModel):
    id: Optional[str] = None
    lat: float
    lng: float
    original_lat: float
    original_lng: float
    snapped: bool
    snap_distance: Optional[float] = None
    road_name: Optional[str] = None
    metrics: LocationMetricsModel
    method: str
    assigned_routes: List[str] = Field(default_factory=list)
    within_campus: Optional[bool] = None


class OptimizeResponse(BaseModel):
    num_stations: int
    locations: List[OptimalLocationModel]
    metadata: dict


class MetricsRequest(BaseModel):
    location: CoordinateModel
    routes: Optional[List[RouteInput]] = None
    existing_station_ids: List[str] = Field(default_factory=list)


class ScenarioInput(BaseModel):
    id: str
    name: str
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class CompareRequest(BaseModel):
    scenarios: List[ScenarioInput] = Field(..., min_length=1)
    routes: Optional[List[RouteInput]] = None


class ScoredScenarioModel(BaseModel):
    scenario: ScenarioInput
    metrics: LocationMetricsModel
    score: float


class SuggestImprovementRequest(BaseModel):
    station_id: Optional[str] = Field(default=None, description="Defaults to the first campus station.")
    routes: Optional[List[RouteInput]] = None


class StationImprovementModel(BaseModel):
    current_metrics: LocationMetricsModel
    optimal_location: OptimalLocationModel
    improvement_distance: float
    should_relocate: bool
    average_distance_improvement: float
    coverage_improvement: float


class CampusResponse(BaseModel):
    name: str
    center: LocationModel
    bounds: Optional[List[float]] = None
    locations: List[LocationModel]
    stations: List[LocationModel]
    routes: List[RouteInput]
