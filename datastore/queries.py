"""Parameterized read queries against the sensor aggregate container."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from models.locations import LOCATION_NAMES
from models.records import STORED_FIELDS

_SELECT_FIELDS = ",\n  ".join(f"c.{name}" for name in STORED_FIELDS)

_LATEST_QUERY = f"""SELECT TOP 1
  {_SELECT_FIELDS}
FROM c
WHERE c.location = @loc
ORDER BY c.windowEndTime DESC"""

_SINCE_QUERY = f"""SELECT
  {_SELECT_FIELDS}
FROM c
WHERE c.location = @loc AND c.windowEndTime >= @since
ORDER BY c.windowEndTime ASC"""


class StoreQueryFailure(RuntimeError):
    """Raised when the underlying store rejects or fails a query."""


@dataclass(frozen=True)
class QuerySpec:
    """A query plus the structured filter it encodes.

    ``query`` and ``parameters`` are what gets sent to Cosmos DB; the remaining
    fields describe the same filter so in-memory stores can evaluate it.
    """

    query: str
    parameters: List[Dict[str, Any]]
    location: str
    since: Optional[str] = None
    descending: bool = False
    limit: Optional[int] = None
    fields: tuple[str, ...] = field(default=STORED_FIELDS)


def format_instant(value: datetime) -> str:
    """Render ``value`` as ``YYYY-MM-DDTHH:MM:SS.sssZ`` in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_instant(value: str) -> datetime:
    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO-8601 timestamp {value!r}") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed.astimezone(timezone.utc)


def _check_location(location_name: str) -> None:
    if location_name not in LOCATION_NAMES:
        raise ValueError(f"{location_name!r} is not a registered location name.")


def latest_query(location_name: str) -> QuerySpec:
    """Select the single most recent record for ``location_name``."""
    _check_location(location_name)
    return QuerySpec(
        query=_LATEST_QUERY,
        parameters=[{"name": "@loc", "value": location_name}],
        location=location_name,
        descending=True,
        limit=1,
    )


def since_query(location_name: str, cutoff: Union[datetime, str]) -> QuerySpec:
    """Select every record for ``location_name`` at or after ``cutoff``, oldest first."""
    _check_location(location_name)
    if isinstance(cutoff, str):
        cutoff = parse_instant(cutoff)
    elif not isinstance(cutoff, datetime):
        raise ValueError(f"Cutoff must be a datetime or ISO-8601 string, got {cutoff!r}.")
    since = format_instant(cutoff)
    return QuerySpec(
        query=_SINCE_QUERY,
        parameters=[
            {"name": "@loc", "value": location_name},
            {"name": "@since", "value": since},
        ],
        location=location_name,
        since=since,
    )
