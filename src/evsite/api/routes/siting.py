"""Charging station siting endpoints."""

from __future__ import annotations

import logging
from typing import Callable, List, TypeVar

from fastapi import APIRouter, HTTPException, status

from ...data.campus_repository import UnknownLocationError
from ...schemas.siting import (
    CompareRequest,
    LocationMetricsModel,
    MetricsRequest,
    OptimizeRequest,
    OptimizeResponse,
    ScoredScenarioModel,
    StationImprovementModel,
    SuggestImprovementRequest,
)
from ...services.siting import service as siting_service

router = APIRouter(prefix="/siting", tags=["siting"])
logger = logging.getLogger(__name__)

T = TypeVar("T")


def _run(action: str, func: Callable[[], T]) -> T:
    try:
        return func()
    except UnknownLocationError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error during {action}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}: {str(exc)}",
        ) from exc


@router.post("/optimize", response_model=OptimizeResponse, status_code=status.HTTP_200_OK)
def optimize(payload: OptimizeRequest) -> OptimizeResponse:
    return _run("optimize station placement", lambda: siting_service.optimize_station_locations(payload))


@router.post("/metrics", response_model=LocationMetricsModel, status_code=status.HTTP_200_OK)
def metrics(payload: MetricsRequest) -> LocationMetricsModel:
    return _run("evaluate location", lambda: siting_service.evaluate_location(payload))


@router.post("/compare", response_model=List[ScoredScenarioModel], status_code=status.HTTP_200_OK)
def compare(payload: CompareRequest) -> List[ScoredScenarioModel]:
    return _run("compare placements", lambda: siting_service.compare_placements(payload))


@router.post("/suggest-improvement", response_model=StationImprovementModel, status_code=status.HTTP_200_OK)
def suggest_improvement(payload: SuggestImprovementRequest) -> StationImprovementModel:
    return _run("suggest station improvement", lambda: siting_service.suggest_improvement(payload))
