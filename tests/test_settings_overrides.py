from __future__ import annotations

from typing import Iterable

import pytest

from datastore.cosmos import CosmosSensorStore
from datastore.mock_cosmos import MockCosmosContainer
from datastore.store import build_default_store
from services.dashboard import build_default_dashboard
from settings import MissingConfiguration, get_settings

_COSMOS_ENVS = ("COSMOS_ENDPOINT", "COSMOS_KEY", "COSMOS_DB_NAME", "COSMOS_CONTAINER_NAME")


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


@pytest.fixture(autouse=True)
def _fresh_caches() -> Iterable[None]:
    caches = (get_settings, build_default_store, build_default_dashboard)
    _clear_caches(caches)
    yield
    _clear_caches(caches)


def test_missing_cosmos_settings_are_all_reported(monkeypatch) -> None:
    for name in _COSMOS_ENVS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("SENSOR_STORE_BACKEND", raising=False)
    monkeypatch.setenv("COSMOS_KEY", "secret")

    with pytest.raises(MissingConfiguration) as excinfo:
        get_settings()

    assert excinfo.value.missing == ["COSMOS_ENDPOINT", "COSMOS_DB_NAME", "COSMOS_CONTAINER_NAME"]
    assert "secret" not in str(excinfo.value)


def test_blank_cosmos_setting_counts_as_missing(monkeypatch) -> None:
    monkeypatch.setenv("COSMOS_ENDPOINT", "https://example.documents.azure.com:443/")
    monkeypatch.setenv("COSMOS_KEY", "   ")
    monkeypatch.setenv("COSMOS_DB_NAME", "iot")
    monkeypatch.setenv("COSMOS_CONTAINER_NAME", "aggregates")
    monkeypatch.delenv("SENSOR_STORE_BACKEND", raising=False)

    with pytest.raises(MissingConfiguration) as excinfo:
        get_settings()

    assert excinfo.value.missing == ["COSMOS_KEY"]


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("COSMOS_ENDPOINT", "https://example.documents.azure.com:443/")
    monkeypatch.setenv("COSMOS_KEY", "secret")
    monkeypatch.setenv("COSMOS_DB_NAME", "iot")
    monkeypatch.setenv("COSMOS_CONTAINER_NAME", "aggregates")
    monkeypatch.setenv("DASHBOARD_WORKER_COUNT", "5")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("SENSOR_STORE_BACKEND", raising=False)

    settings = get_settings()

    assert settings.store_backend == "cosmos"
    assert settings.cosmos_db_name == "iot"
    assert settings.cosmos_container_name == "aggregates"
    assert settings.dashboard_workers == 5
    assert settings.log_level == "DEBUG"


def test_invalid_worker_count_falls_back_to_default(monkeypatch, mock_backend_env) -> None:
    monkeypatch.setenv("DASHBOARD_WORKER_COUNT", "many")

    assert get_settings().dashboard_workers == 3


def test_unknown_backend_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("SENSOR_STORE_BACKEND", "redis")

    with pytest.raises(ValueError):
        get_settings()


def test_mock_backend_builds_persistent_container(mock_backend_env, tmp_path) -> None:
    store = build_default_store()
    dashboard = build_default_dashboard()

    try:
        assert isinstance(store, MockCosmosContainer)
        assert store.persistence_path == tmp_path / "aggregates.json"
        assert dashboard.store is store
        assert dashboard.executor._max_workers == 3
    finally:
        dashboard.shutdown()


def test_cosmos_backend_connects_with_configured_names(monkeypatch) -> None:
    monkeypatch.setenv("COSMOS_ENDPOINT", "https://example.documents.azure.com:443/")
    monkeypatch.setenv("COSMOS_KEY", "secret")
    monkeypatch.setenv("COSMOS_DB_NAME", "iot")
    monkeypatch.setenv("COSMOS_CONTAINER_NAME", "aggregates")
    monkeypatch.delenv("SENSOR_STORE_BACKEND", raising=False)
    calls = {}

    def fake_connect(cls, endpoint, key, database_name, container_name):
        calls.update(
            endpoint=endpoint, key=key, database_name=database_name, container_name=container_name
        )
        return cls(container=object())

    monkeypatch.setattr(CosmosSensorStore, "connect", classmethod(fake_connect))

    store = build_default_store()

    assert isinstance(store, CosmosSensorStore)
    assert calls == {
        "endpoint": "https://example.documents.azure.com:443/",
        "key": "secret",
        "database_name": "iot",
        "container_name": "aggregates",
    }
