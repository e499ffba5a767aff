"""Static registry of the monitored canal locations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Location:
    """A monitored location.

    ``id`` is the short key used in URLs, ``name`` is the ``location`` value
    stored on every aggregate document.
    """

    id: str
    name: str


LOCATIONS: Tuple[Location, ...] = (
    Location(id="dows", name="Dow's Lake"),
    Location(id="fifth", name="Fifth Avenue"),
    Location(id="nac", name="NAC"),
)

LOCATION_NAMES = frozenset(location.name for location in LOCATIONS)


class UnknownLocation(LookupError):
    """Raised when a sensor id is not part of the registry."""

    def __init__(self, sensor_id: str) -> None:
        super().__init__(f"Unknown sensor id {sensor_id!r}.")
        self.sensor_id = sensor_id


def find_location(sensor_id: str) -> Optional[Location]:
    for location in LOCATIONS:
        if location.id == sensor_id:
            return location
    return None


def resolve_location(sensor_id: str) -> Location:
    location = find_location(sensor_id)
    if location is None:
        raise UnknownLocation(sensor_id)
    return location
