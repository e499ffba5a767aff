"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.records import OverallStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DashboardRecord(_CamelModel):
    """Metrics for one aggregation window as served to the dashboard.

    Values are copied from the stored document without conversion; a field the
    document lacks is served as ``null``.
    """

    sensor_id: str = Field(..., description="Short location identifier, e.g. 'dows'.")
    location: Any = None
    avg_ice_thickness: Any = Field(default=None, description="Centimetres.")
    avg_surface_temperature: Any = Field(default=None, description="Degrees Celsius.")
    max_snow_accumulation: Any = Field(default=None, description="Centimetres.")
    avg_external_temperature: Any = Field(default=None, description="Degrees Celsius.")
    safety_status: Any = None


class LatestRecord(DashboardRecord):
    """Latest record for a location; window end is served as ``timestamp``."""

    timestamp: Any = None


class HistoryRecord(DashboardRecord):
    """History entry; window end is served as ``windowEndTime``."""

    window_end_time: Any = None


class LatestResponse(_CamelModel):
    success: bool = True
    data: List[LatestRecord] = Field(default_factory=list)


class StatusResponse(_CamelModel):
    success: bool = True
    overall_status: OverallStatus


class ErrorResponse(BaseModel):
    error: str


class StatusErrorResponse(BaseModel):
    success: bool = False
    error: str
