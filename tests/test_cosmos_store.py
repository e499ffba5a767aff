"""Tests for the Cosmos DB store adapter using a stub container client."""

from __future__ import annotations

from typing import Any, Dict, List

import pytest
from azure.core.exceptions import ServiceRequestError

from datastore.cosmos import CosmosSensorStore
from datastore.queries import StoreQueryFailure, latest_query


class StubContainer:
    def __init__(self, rows: List[Dict[str, Any]] | None = None, error: Exception | None = None) -> None:
        self.rows = rows or []
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def query_items(self, **kwargs: Any):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return iter(self.rows)


class StubClient:
    def __init__(self) -> None:
        self.exited = False

    def __enter__(self) -> "StubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.exited = True


def test_query_passes_bound_parameters_and_cross_partition_flag() -> None:
    container = StubContainer(rows=[{"location": "NAC"}])
    store = CosmosSensorStore(container=container)
    spec = latest_query("NAC")

    rows = store.query_items(spec)

    assert rows == [{"location": "NAC"}]
    assert container.calls == [
        {
            "query": spec.query,
            "parameters": [{"name": "@loc", "value": "NAC"}],
            "enable_cross_partition_query": True,
        }
    ]


def test_azure_errors_become_store_query_failures() -> None:
    container = StubContainer(error=ServiceRequestError("connection reset"))
    store = CosmosSensorStore(container=container)

    with pytest.raises(StoreQueryFailure) as excinfo:
        store.query_items(latest_query("NAC"))

    assert isinstance(excinfo.value.__cause__, ServiceRequestError)
    assert "connection reset" not in str(excinfo.value)


def test_close_releases_client() -> None:
    client = StubClient()
    store = CosmosSensorStore(container=StubContainer(), client=client)  # type: ignore[arg-type]

    store.close()

    assert client.exited is True
