"""Domain models shared across services."""

from __future__ import annotations

from enum import Enum

# Field names of an aggregate document as written by the ingestion pipeline.
STORED_FIELDS = (
    "location",
    "windowEndTime",
    "avgIceThicknessCm",
    "avgSurfaceTemperatureC",
    "maxSnowAccumulationCm",
    "avgExternalTemperatureC",
    "safetyStatus",
)


class SafetyStatus(str, Enum):
    """Safety label attached to each aggregate record."""

    safe = "Safe"
    caution = "Caution"
    unsafe = "Unsafe"


class OverallStatus(str, Enum):
    """Summary label across all locations."""

    safe = "Safe"
    caution = "Caution"
    unsafe = "Unsafe"
    unknown = "Unknown"
