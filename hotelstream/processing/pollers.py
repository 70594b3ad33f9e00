"""Poll orchestration: fetch a batch, classify or normalize it, store it."""
from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional

from hotelstream.core.models import ClassifiedBatch, ReservationRecord
from hotelstream.ingestion.classifier import BALANCES_BUCKET, RAW_BUCKET, STATS_BUCKET, classify
from hotelstream.ingestion.reservations import normalize
from hotelstream.processing.client import StreamClient
from hotelstream.storage.history import DEFAULT_CAPACITY, WEBHOOK_CAPACITY, HistoryStore
from hotelstream.storage.snapshots import FILES, SnapshotStore

logger = logging.getLogger(__name__)

EVENTS_CATEGORY = "events"


def reservation_store(name: str = "reservations", capacity: int = DEFAULT_CAPACITY) -> HistoryStore:
    return HistoryStore(name, [EVENTS_CATEGORY], capacity=capacity)


def stats_store(capacity: int = DEFAULT_CAPACITY) -> HistoryStore:
    return HistoryStore("stats", [STATS_BUCKET, BALANCES_BUCKET, RAW_BUCKET], capacity=capacity)


def webhook_store(capacity: int = WEBHOOK_CAPACITY) -> HistoryStore:
    return reservation_store("webhook", capacity=capacity)


def _snapshot(snapshots: Optional[SnapshotStore], key: str, records: List[Any]) -> None:
    if snapshots is None or not records:
        return
    snapshots.append(FILES[key], [record.to_dict() for record in records])


class ReservationPoller:
    """Primary stream: reservations and other guest-facing events."""

    def __init__(
        self,
        client: StreamClient,
        store: HistoryStore,
        snapshots: Optional[SnapshotStore] = None,
        num_messages: int = 1,
    ) -> None:
        self.client = client
        self.store = store
        self.snapshots = snapshots
        self.num_messages = num_messages
        self._lock = threading.Lock()

    def poll(self) -> List[ReservationRecord]:
        """Fetch and store one batch. Fetch errors propagate and store nothing."""

        with self._lock:
            raw_events = self.client.poll(self.num_messages)
            if not raw_events:
                logger.info("No new messages.")
                return []

            logger.info("New data received: %d", len(raw_events))
            records = normalize(raw_events)
            self.store.append(EVENTS_CATEGORY, records)
            _snapshot(self.snapshots, "events", records)
            return records


class StatsPoller:
    """Secondary stream: statistics snapshots and folio balances."""

    def __init__(
        self,
        client: StreamClient,
        store: HistoryStore,
        snapshots: Optional[SnapshotStore] = None,
        num_messages: int = 5,
    ) -> None:
        self.client = client
        self.store = store
        self.snapshots = snapshots
        self.num_messages = num_messages
        self._lock = threading.Lock()

    def poll(self, num_messages: Optional[int] = None) -> ClassifiedBatch:
        """Fetch, classify, and store one batch. Fetch errors propagate."""

        count = num_messages or self.num_messages
        with self._lock:
            raw_events = self.client.poll(count)
            if not raw_events:
                logger.info("Stats stream: no new messages")
                return ClassifiedBatch()

            logger.info("Stats stream: received %d messages", len(raw_events))
            batch = classify(raw_events)
            self.store.append(STATS_BUCKET, batch.stats)
            self.store.append(BALANCES_BUCKET, batch.balances)
            self.store.append(RAW_BUCKET, batch.raw)
            _snapshot(self.snapshots, "stats", batch.stats)
            _snapshot(self.snapshots, "balances", batch.balances)
            return batch


def ingest_webhook(
    body: Any,
    store: HistoryStore,
    snapshots: Optional[SnapshotStore] = None,
) -> List[ReservationRecord]:
    """Normalize events pushed to the webhook and keep them in ``store``."""

    events = body if isinstance(body, list) else [body]
    records = normalize(events)
    store.append(EVENTS_CATEGORY, records)
    _snapshot(snapshots, "webhook", records)
    logger.info("Processed %d webhook events.", len(records))
    return records
