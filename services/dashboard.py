"""Read-side orchestration for the dashboard endpoints."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Callable, List, Optional

from app.schemas import HistoryRecord, LatestRecord
from datastore.queries import latest_query, since_query
from datastore.store import SensorStore, build_default_store
from models.locations import LOCATIONS, Location, resolve_location
from models.records import OverallStatus
from services.mapper import to_history_record, to_latest_record
from services.status import derive_overall_status
from settings import get_settings

logger = logging.getLogger(__name__)

HISTORY_WINDOW = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DashboardService:
    """Fans queries out over the location registry and shapes the results."""

    def __init__(
        self,
        store: SensorStore,
        workers: int = 3,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.clock = clock
        self.executor = ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="dashboard-query"
        )

    def latest_for_location(self, location: Location) -> Optional[LatestRecord]:
        """Return the most recent record for ``location`` or ``None`` if it has none."""
        documents = self.store.query_items(latest_query(location.name))
        if not documents:
            logger.info("No aggregates recorded yet", extra={"sensor_id": location.id})
            return None
        return to_latest_record(documents[0], location)

    def latest(self) -> List[LatestRecord]:
        """Latest record per registered location, in registry order.

        Every location is queried even if another one fails; the first failure
        is re-raised once all queries have finished.
        """
        futures: List[Future[Optional[LatestRecord]]] = [
            self.executor.submit(self.latest_for_location, location) for location in LOCATIONS
        ]
        wait(futures)

        results: List[LatestRecord] = []
        failure: Optional[BaseException] = None
        for location, future in zip(LOCATIONS, futures):
            error = future.exception()
            if error is not None:
                logger.error(
                    "Latest query failed",
                    extra={"sensor_id": location.id, "reason": repr(error)},
                )
                failure = failure or error
                continue
            record = future.result()
            if record is not None:
                results.append(record)

        if failure is not None:
            raise failure
        return results

    def history(self, sensor_id: str) -> List[HistoryRecord]:
        """Records from the last hour for ``sensor_id``, oldest first."""
        location = resolve_location(sensor_id)
        cutoff = self.clock() - HISTORY_WINDOW
        spec = since_query(location.name, cutoff)
        documents = self.store.query_items(spec)
        logger.debug(
            "History query finished",
            extra={"sensor_id": sensor_id, "since": spec.since, "record_count": len(documents)},
        )
        return [to_history_record(document, location) for document in documents]

    def overall_status(self) -> OverallStatus:
        records = self.latest()
        return derive_overall_status(record.safety_status for record in records)

    def shutdown(self) -> None:
        """Cancel queued queries and wait for running ones to finish."""
        self.executor.shutdown(wait=True, cancel_futures=True)


@lru_cache
def build_default_dashboard(
    workers: Optional[int] = None,
) -> DashboardService:
    """Factory that wires the dashboard service with the configured store."""
    store = build_default_store()
    worker_count = workers or get_settings().dashboard_workers
    return DashboardService(store=store, workers=worker_count)
