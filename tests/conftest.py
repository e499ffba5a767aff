from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator

import pytest

from datastore.mock_cosmos import MockCosmosContainer
from datastore.store import build_default_store
from services.dashboard import DashboardService, build_default_dashboard
from settings import get_settings

NOW = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def make_document(
    location: str = "Fifth Avenue",
    window_end: str = "2024-01-15T10:00:00Z",
    ice: float = 22.5,
    status: str = "Safe",
    **overrides: Any,
) -> Dict[str, Any]:
    document: Dict[str, Any] = {
        "id": f"{location}-{window_end}",
        "location": location,
        "windowEndTime": window_end,
        "avgIceThicknessCm": ice,
        "avgSurfaceTemperatureC": -4.2,
        "maxSnowAccumulationCm": 3.1,
        "avgExternalTemperatureC": -9.8,
        "safetyStatus": status,
    }
    document.update(overrides)
    return document


@pytest.fixture
def document_factory() -> Callable[..., Dict[str, Any]]:
    return make_document


@pytest.fixture
def container() -> MockCosmosContainer:
    return MockCosmosContainer(name="aggregates")


@pytest.fixture
def dashboard(container: MockCosmosContainer) -> Iterator[DashboardService]:
    service = DashboardService(store=container, workers=3, clock=lambda: NOW)
    yield service
    service.shutdown()


@pytest.fixture
def mock_backend_env(monkeypatch, tmp_path) -> Iterator[None]:
    for name in ("COSMOS_ENDPOINT", "COSMOS_KEY", "COSMOS_DB_NAME", "COSMOS_CONTAINER_NAME"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SENSOR_STORE_BACKEND", "mock")
    monkeypatch.setenv("MOCK_COSMOS_PERSISTENCE_PATH", str(tmp_path / "aggregates.json"))
    caches = (get_settings, build_default_store, build_default_dashboard)
    for cache in caches:
        cache.cache_clear()
    yield
    for cache in caches:
        cache.cache_clear()
