from __future__ import annotations

from typing import Any, Dict, List

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the dashboard API."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def get_latest(self) -> List[Dict[str, Any]]:
        payload = self._get_json("/api/latest")
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise typer.BadParameter("Unexpected response payload for latest records.")
        return data

    def get_history(self, sensor_id: str) -> List[Dict[str, Any]]:
        response = self._client.get(f"/api/history/{sensor_id}")
        if response.status_code == 400:
            raise typer.BadParameter(f"Sensor {sensor_id!r} is not a known location.")
        payload = self._checked_json(response)
        if not isinstance(payload, list):
            raise typer.BadParameter("Unexpected response payload for history records.")
        return payload

    def get_status(self) -> str:
        payload = self._get_json("/api/status")
        overall = payload.get("overallStatus") if isinstance(payload, dict) else None
        if not isinstance(overall, str):
            raise typer.BadParameter("Unexpected response payload for overall status.")
        return overall

    def _get_json(self, path: str) -> Any:
        return self._checked_json(self._client.get(path))

    def _checked_json(self, response: httpx.Response) -> Any:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("error") or data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
