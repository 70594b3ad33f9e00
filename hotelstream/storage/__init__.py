"""Bounded in-memory histories and optional on-disk snapshots."""
from hotelstream.storage.history import (
    DEFAULT_CAPACITY,
    WEBHOOK_CAPACITY,
    BoundedHistory,
    HistoryStore,
)
from hotelstream.storage.snapshots import FILES, SNAPSHOT_CAPACITY, SnapshotStore

__all__ = [
    "DEFAULT_CAPACITY",
    "WEBHOOK_CAPACITY",
    "BoundedHistory",
    "HistoryStore",
    "FILES",
    "SNAPSHOT_CAPACITY",
    "SnapshotStore",
]
