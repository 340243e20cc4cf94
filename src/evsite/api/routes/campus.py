"""Campus dataset endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.siting import CampusResponse
from ...services.siting.service import describe_campus

router = APIRouter(prefix="/campus", tags=["campus"])
logger = logging.getLogger(__name__)


@router.get("", response_model=CampusResponse, status_code=status.HTTP_200_OK)
def get_campus() -> CampusResponse:
    try:
        return describe_campus()
    except (FileNotFoundError, ValueError) as exc:
        logger.exception(f"Error loading campus data: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load campus data: {str(exc)}",
        ) from exc
