from __future__ import annotations

from typing import Any, Dict, Iterable, Sequence

import typer

STATUS_COLORS = {
    "Safe": typer.colors.GREEN,
    "Caution": typer.colors.YELLOW,
    "Unsafe": typer.colors.RED,
}

_METRIC_COLUMNS: Sequence[tuple[str, str]] = (
    ("ice_cm", "avgIceThickness"),
    ("surface_c", "avgSurfaceTemperature"),
    ("snow_cm", "maxSnowAccumulation"),
    ("external_c", "avgExternalTemperature"),
)


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _format_metric(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value:.1f}"
    return "-"


def _echo_status(label: str, status: Any) -> None:
    typer.echo(f"{label}: ", nl=False)
    typer.secho(str(status), fg=STATUS_COLORS.get(status))


def render_latest(records: Sequence[Dict[str, Any]]) -> None:
    echo_heading("Latest Conditions")
    if not records:
        typer.echo("(no data)")
        return
    for record in records:
        typer.echo()
        echo_heading(f"{record.get('location')} [{record.get('sensorId')}]")
        echo_key_values([("timestamp", record.get("timestamp"))])
        echo_key_values(
            (name, _format_metric(record.get(field))) for name, field in _METRIC_COLUMNS
        )
        _echo_status("safety_status", record.get("safetyStatus"))


def render_history(sensor_id: str, records: Sequence[Dict[str, Any]]) -> None:
    echo_heading(f"History for {sensor_id} (last hour)")
    if not records:
        typer.echo("(no data)")
        return
    header = ["window_end", *(name for name, _ in _METRIC_COLUMNS), "status"]
    typer.echo("  ".join(header))
    for record in records:
        cells = [str(record.get("windowEndTime"))]
        cells.extend(_format_metric(record.get(field)) for _, field in _METRIC_COLUMNS)
        cells.append(str(record.get("safetyStatus")))
        typer.echo("  ".join(cells))


def render_status(overall: str) -> None:
    _echo_status("Overall status", overall)
