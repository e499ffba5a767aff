"""Azure Cosmos DB backed sensor store."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Any, Dict, Optional

from azure.core.exceptions import AzureError
from azure.cosmos import CosmosClient

from datastore.queries import QuerySpec, StoreQueryFailure

logger = logging.getLogger(__name__)


class CosmosSensorStore:
    """Runs query specs against a Cosmos DB container client."""

    def __init__(self, container: Any, client: Optional[CosmosClient] = None) -> None:
        self.container = container
        self._resources = ExitStack()
        if client is not None:
            self._resources.enter_context(client)

    @classmethod
    def connect(
        cls, endpoint: str, key: str, database_name: str, container_name: str
    ) -> "CosmosSensorStore":
        client = CosmosClient(endpoint, credential=key)
        container = client.get_database_client(database_name).get_container_client(
            container_name
        )
        logger.info("Using Cosmos DB %s / %s", database_name, container_name)
        return cls(container=container, client=client)

    def query_items(self, spec: QuerySpec) -> list[Dict[str, Any]]:
        try:
            return list(
                self.container.query_items(
                    query=spec.query,
                    parameters=spec.parameters,
                    enable_cross_partition_query=True,
                )
            )
        except AzureError as exc:
            raise StoreQueryFailure(
                f"Cosmos query for location {spec.location!r} failed."
            ) from exc

    def close(self) -> None:
        self._resources.close()
