"""Classification, normalization, and bounded retention of PMS stream events."""
from hotelstream.core import (
    BalanceRecord,
    ClassifiedBatch,
    GenericStatRecord,
    RawRecord,
    ReservationRecord,
    Settings,
    StatsSnapshotRecord,
    configure_logging,
    load_settings,
)
from hotelstream.ingestion import classify, normalize
from hotelstream.storage import BoundedHistory, HistoryStore, SnapshotStore

__all__ = [
    "BalanceRecord",
    "ClassifiedBatch",
    "GenericStatRecord",
    "RawRecord",
    "ReservationRecord",
    "Settings",
    "StatsSnapshotRecord",
    "configure_logging",
    "load_settings",
    "classify",
    "normalize",
    "BoundedHistory",
    "HistoryStore",
    "SnapshotStore",
]
