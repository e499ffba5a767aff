"""Translate stored aggregate documents into dashboard records."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from app.schemas import HistoryRecord, LatestRecord
from models.locations import Location
from models.records import STORED_FIELDS

logger = logging.getLogger(__name__)


def _common_fields(document: Mapping[str, Any], location: Location) -> Dict[str, Any]:
    missing = [name for name in STORED_FIELDS if document.get(name) is None]
    if missing:
        logger.warning(
            "Aggregate document is missing fields",
            extra={"sensor_id": location.id, "missing_fields": missing},
        )
    return {
        "sensor_id": location.id,
        "location": document.get("location"),
        "avg_ice_thickness": document.get("avgIceThicknessCm"),
        "avg_surface_temperature": document.get("avgSurfaceTemperatureC"),
        "max_snow_accumulation": document.get("maxSnowAccumulationCm"),
        "avg_external_temperature": document.get("avgExternalTemperatureC"),
        "safety_status": document.get("safetyStatus"),
    }


def to_latest_record(document: Mapping[str, Any], location: Location) -> LatestRecord:
    return LatestRecord(
        timestamp=document.get("windowEndTime"),
        **_common_fields(document, location),
    )


def to_history_record(document: Mapping[str, Any], location: Location) -> HistoryRecord:
    return HistoryRecord(
        window_end_time=document.get("windowEndTime"),
        **_common_fields(document, location),
    )
