"""Overall safety status derivation."""

from __future__ import annotations

from typing import Iterable, Union

from models.records import OverallStatus, SafetyStatus


def derive_overall_status(
    statuses: Iterable[Union[SafetyStatus, str, None]],
) -> OverallStatus:
    """Return the most severe status, or ``Unknown`` when there is none.

    Any entry counts towards ``Safe``, including labels outside the known set,
    so a location reporting data is never treated as missing.
    """
    seen = [
        value.value if isinstance(value, SafetyStatus) else value for value in statuses
    ]
    if not seen:
        return OverallStatus.unknown
    if SafetyStatus.unsafe.value in seen:
        return OverallStatus.unsafe
    if SafetyStatus.caution.value in seen:
        return OverallStatus.caution
    return OverallStatus.safe
