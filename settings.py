from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_COSMOS_ENDPOINT_ENV = "COSMOS_ENDPOINT"
_COSMOS_KEY_ENV = "COSMOS_KEY"
_COSMOS_DB_NAME_ENV = "COSMOS_DB_NAME"
_COSMOS_CONTAINER_ENV = "COSMOS_CONTAINER_NAME"
_STORE_BACKEND_ENV = "SENSOR_STORE_BACKEND"
_MOCK_PATH_ENV = "MOCK_COSMOS_PERSISTENCE_PATH"
_WORKER_COUNT_ENV = "DASHBOARD_WORKER_COUNT"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_REQUIRED_COSMOS_ENVS = (
    _COSMOS_ENDPOINT_ENV,
    _COSMOS_KEY_ENV,
    _COSMOS_DB_NAME_ENV,
    _COSMOS_CONTAINER_ENV,
)

BACKEND_COSMOS = "cosmos"
BACKEND_MOCK = "mock"


class MissingConfiguration(RuntimeError):
    """Raised at startup when required settings are absent."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"{', '.join(missing)} must be set in the environment or .env")
        self.missing = missing


@dataclass(frozen=True)
class Settings:
    cosmos_endpoint: Optional[str]
    cosmos_key: Optional[str]
    cosmos_db_name: Optional[str]
    cosmos_container_name: Optional[str]
    store_backend: str
    mock_persistence_path: Optional[str]
    dashboard_workers: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_worker_count(default: int) -> int:
    value = os.getenv(_WORKER_COUNT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def read_log_level(default: str = "INFO") -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


def _read_backend(default: str) -> str:
    backend = _read_str_env(_STORE_BACKEND_ENV, default).lower()
    if backend not in {BACKEND_COSMOS, BACKEND_MOCK}:
        raise ValueError(
            f"{_STORE_BACKEND_ENV} must be {BACKEND_COSMOS!r} or {BACKEND_MOCK!r}, got {backend!r}."
        )
    return backend


@lru_cache
def get_settings() -> Settings:
    backend = _read_backend(BACKEND_COSMOS)
    settings = Settings(
        cosmos_endpoint=_read_optional_env(_COSMOS_ENDPOINT_ENV),
        cosmos_key=_read_optional_env(_COSMOS_KEY_ENV),
        cosmos_db_name=_read_optional_env(_COSMOS_DB_NAME_ENV),
        cosmos_container_name=_read_optional_env(_COSMOS_CONTAINER_ENV),
        store_backend=backend,
        mock_persistence_path=_read_optional_env(_MOCK_PATH_ENV),
        dashboard_workers=_read_worker_count(3),
        log_level=read_log_level("INFO"),
    )
    if backend == BACKEND_COSMOS:
        missing = [name for name in _REQUIRED_COSMOS_ENVS if not _read_optional_env(name)]
        if missing:
            raise MissingConfiguration(missing)
    return settings
