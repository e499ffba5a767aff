"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from typing import List, Union

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.schemas import (
    ErrorResponse,
    HistoryRecord,
    LatestResponse,
    StatusErrorResponse,
    StatusResponse,
)
from models.locations import UnknownLocation
from services.dashboard import DashboardService, build_default_dashboard

logger = logging.getLogger(__name__)

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


def _error(status_code: int, body: Union[ErrorResponse, StatusErrorResponse]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get(
    "/api/latest",
    response_model=LatestResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Latest aggregate per location, used by the dashboard cards.",
)
def get_latest(
    dashboard: DashboardService = Depends(get_dashboard),
) -> Union[LatestResponse, JSONResponse]:
    try:
        records = dashboard.latest()
    except Exception:
        logger.exception("Error in /api/latest")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(error="Latest query failed")
        )
    return LatestResponse(data=records)


@router.get(
    "/api/history/{sensor_id}",
    response_model=List[HistoryRecord],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Aggregates from the last hour for one location, oldest first.",
)
def get_history(
    sensor_id: str,
    dashboard: DashboardService = Depends(get_dashboard),
) -> Union[List[HistoryRecord], JSONResponse]:
    try:
        return dashboard.history(sensor_id)
    except UnknownLocation:
        return _error(status.HTTP_400_BAD_REQUEST, ErrorResponse(error="Unknown sensor id"))
    except Exception:
        logger.exception("Error in /api/history", extra={"sensor_id": sensor_id})
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(error="History query failed")
        )


@router.get(
    "/api/status",
    response_model=StatusResponse,
    responses={500: {"model": StatusErrorResponse}},
    summary="Most severe safety status across all locations.",
)
def get_status(
    dashboard: DashboardService = Depends(get_dashboard),
) -> Union[StatusResponse, JSONResponse]:
    try:
        overall = dashboard.overall_status()
    except Exception:
        logger.exception("Error in /api/status")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, StatusErrorResponse(error="Status failed")
        )
    logger.debug("Overall status derived", extra={"overall_status": overall.value})
    return StatusResponse(overall_status=overall)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
