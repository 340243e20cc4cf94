"""Energy consumption, battery and trip endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...data.campus_repository import UnknownLocationError
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
)
from ...services.energy import service as energy_service

router = APIRouter(prefix="/energy", tags=["energy"])
logger = logging.getLogger(__name__)


@router.post("/consumption", response_model=EnergyBreakdownModel, status_code=status.HTTP_200_OK)
def consumption(payload: EnergyConsumptionRequest) -> EnergyBreakdownModel:
    return energy_service.estimate_consumption(payload)


@router.post("/charging-time", response_model=ChargingPlanModel, status_code=status.HTTP_200_OK)
def charging_time(payload: ChargingTimeRequest) -> ChargingPlanModel:
    try:
        return energy_service.estimate_charging_time(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/remaining-battery", response_model=RemainingBatteryResponse, status_code=status.HTTP_200_OK)
def remaining_battery(payload: RemainingBatteryRequest) -> RemainingBatteryResponse:
    return energy_service.estimate_remaining_battery(payload)


@router.post("/charging-intervals", response_model=ChargingScheduleResponse, status_code=status.HTTP_200_OK)
def charging_intervals(payload: ChargingIntervalsRequest) -> ChargingScheduleResponse:
    try:
        return energy_service.plan_charging_intervals(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/trip", response_model=TripResponse, status_code=status.HTTP_200_OK)
def trip(payload: TripRequest) -> TripResponse:
    try:
        return energy_service.build_trip_report(payload)
    except UnknownLocationError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error building trip report: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate trip: {str(exc)}",
        ) from exc
