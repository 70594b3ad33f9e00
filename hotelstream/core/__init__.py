"""Core building blocks for the hotelstream package."""
from hotelstream.core.config import Settings, load_settings
from hotelstream.core.logging import configure_logging
from hotelstream.core.models import (
    BalanceRecord,
    ClassifiedBatch,
    EventRecord,
    GenericStatRecord,
    RawRecord,
    ReservationDetails,
    ReservationRecord,
    StatsSnapshotRecord,
)

__all__ = [
    "Settings",
    "load_settings",
    "configure_logging",
    "BalanceRecord",
    "ClassifiedBatch",
    "EventRecord",
    "GenericStatRecord",
    "RawRecord",
    "ReservationDetails",
    "ReservationRecord",
    "StatsSnapshotRecord",
]
