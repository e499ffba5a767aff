from __future__ import annotations
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Protocol

from datastore.cosmos import CosmosSensorStore
from datastore.mock_cosmos import MockCosmosContainer
from datastore.queries import QuerySpec
from settings import BACKEND_MOCK, get_settings


class SensorStore(Protocol):
    """Read-only collaborator that executes query specs."""

    def query_items(self, spec: QuerySpec) -> list[Dict[str, Any]]:
        ...

    def close(self) -> None:
        ...


@lru_cache
def build_default_store() -> SensorStore:
    settings = get_settings()
    if settings.store_backend == BACKEND_MOCK:
        path = settings.mock_persistence_path
        return MockCosmosContainer(
            name=settings.cosmos_container_name or "aggregates",
            persistence_path=Path(path) if path else None,
        )
    return CosmosSensorStore.connect(
        endpoint=settings.cosmos_endpoint or "",
        key=settings.cosmos_key or "",
        database_name=settings.cosmos_db_name or "",
        container_name=settings.cosmos_container_name or "",
    )
