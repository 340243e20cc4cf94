"""Energy and battery orchestration service."""

from __future__ import annotations

from dataclasses import asdict
from typing import Sequence

from ...config import settings
from ...data.campus_repository import load_campus
from ...models.domain import DEFAULT_VEHICLE, Coordinate, VehicleProfile
from ...schemas.energy import (
    ChargingIntervalsRequest,
    ChargingPlanModel,
    ChargingScheduleResponse,
    ChargingTimeRequest,
    EnergyBreakdownModel,
    EnergyConsumptionRequest,
    RemainingBatteryRequest,
    RemainingBatteryResponse,
    TripRequest,
    TripResponse,
    VehicleProfileModel,
)
from ..providers.elevation import ElevationClient, ElevationPoint
from ..providers.osrm_client import RouteResponse, get_route
from .battery import calculate_charging_intervals, calculate_charging_time, calculate_remaining_battery
from .model import calculate_energy_consumption
from .trip import plan_trip


def _vehicle(model: VehicleProfileModel | None) -> VehicleProfile:
    return model.to_domain() if model else DEFAULT_VEHICLE


def fetch_route(start: Coordinate, end: Coordinate) -> RouteResponse:
    return get_route(start, end)


def fetch_elevations(coordinates: Sequence[Coordinate]) -> list[ElevationPoint]:
    return ElevationClient().lookup(coordinates)


def estimate_consumption(payload: EnergyConsumptionRequest) -> EnergyBreakdownModel:
    breakdown = calculate_energy_consumption(
        payload.distance_m,
        payload.elevation_gain_m,
        payload.elevation_loss_m,
        _vehicle(payload.vehicle),
    )
    return EnergyBreakdownModel(**asdict(breakdown))


def estimate_charging_time(payload: ChargingTimeRequest) -> ChargingPlanModel:
    plan = calculate_charging_time(
        payload.current_battery,
        payload.target_battery,
        payload.charger_power_kw or settings.charger_power_kw,
        payload.battery_capacity_kwh,
    )
    return ChargingPlanModel(**asdict(plan))


def estimate_remaining_battery(payload: RemainingBatteryRequest) -> RemainingBatteryResponse:
    remaining = calculate_remaining_battery(
        payload.current_battery, payload.energy_consumed_kwh, payload.battery_capacity_kwh
    )
    return RemainingBatteryResponse(current_battery=payload.current_battery, remaining_battery=remaining)


def plan_charging_intervals(payload: ChargingIntervalsRequest) -> ChargingScheduleResponse:
    if any(energy < 0 for energy in payload.trip_energies_kwh):
        raise ValueError("Trip energies must be non-negative.")
    schedule = calculate_charging_intervals(
        payload.trip_energies_kwh,
        payload.initial_battery,
        capacity_kwh=payload.battery_capacity_kwh,
        charger_power_kw=payload.charger_power_kw or settings.charger_power_kw,
        min_threshold_pct=settings.min_battery_threshold_pct,
        charge_to_pct=settings.charge_target_pct,
    )
    return ChargingScheduleResponse(**asdict(schedule))


def build_trip_report(payload: TripRequest) -> TripResponse:
    campus = load_campus()
    start = campus.require(payload.start_id)
    end = campus.require(payload.end_id)
    charger_power = next(
        (station.power_kw for station in campus.stations if station.power_kw),
        settings.charger_power_kw,
    )
    report = plan_trip(
        start,
        end,
        payload.battery_level,
        route_provider=fetch_route,
        elevation_provider=fetch_elevations,
        profile=_vehicle(payload.vehicle),
        charger_power_kw=charger_power,
        min_threshold_pct=settings.min_battery_threshold_pct,
        charge_target_pct=settings.charge_target_pct,
        sample_points=settings.elevation_sample_points,
    )
    return TripResponse(**asdict(report))
