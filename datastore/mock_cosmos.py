from __future__ import annotations
import json
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional

from datastore.queries import QuerySpec


def _document_key(document: Dict[str, Any]) -> str:
    if document.get("id"):
        return str(document["id"])
    return f"{document.get('location')}|{document.get('windowEndTime')}"


class MockCosmosContainer:
    """In-memory stand-in for a Cosmos DB container of aggregate documents."""

    def __init__(self, name: str, persistence_path: Optional[Path] = None) -> None:
        self.name = name
        self._items: Dict[str, Dict[str, Any]] = {}
        self.persistence_path = persistence_path
        self._lock = Lock()
        self.queries: List[QuerySpec] = []
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def upsert_item(self, document: Dict[str, Any]) -> None:
        """Seed a document for tests and local development; not an ingestion path."""
        with self._lock:
            self._items[_document_key(document)] = json.loads(json.dumps(document))
            self._persist()

    def upsert_items(self, documents: Iterable[Dict[str, Any]]) -> None:
        """Seed several documents; see ``upsert_item``."""
        for document in documents:
            self.upsert_item(document)

    def scan(self) -> list[Dict[str, Any]]:
        """Return copies of all stored documents."""

        with self._lock:
            return [dict(item) for item in self._items.values()]

    def query_items(self, spec: QuerySpec) -> list[Dict[str, Any]]:
        with self._lock:
            self.queries.append(spec)
            matches = [
                item
                for item in self._items.values()
                if item.get("location") == spec.location and self._in_window(item, spec.since)
            ]
        matches.sort(key=lambda item: item.get("windowEndTime") or "", reverse=spec.descending)
        if spec.limit is not None:
            matches = matches[: spec.limit]
        # Projection drops fields the document does not carry, like Cosmos does.
        return [
            {name: item[name] for name in spec.fields if name in item} for item in matches
        ]

    def close(self) -> None:
        pass

    @staticmethod
    def _in_window(item: Dict[str, Any], since: Optional[str]) -> bool:
        if since is None:
            return True
        value = item.get("windowEndTime")
        return isinstance(value, str) and value >= since

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = sorted(self._items.values(), key=_document_key)
        self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "[]"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            data = []

        for document in data:
            if isinstance(document, dict):
                self._items[_document_key(document)] = document
