"""Polling, scheduling, and PMS API access."""
from hotelstream.processing.client import AccessDeniedError, StreamClient, StreamError, UpstreamError
from hotelstream.processing.inventory import InventoryResult, load_inventory, summarize_rooms
from hotelstream.processing.pollers import (
    EVENTS_CATEGORY,
    ReservationPoller,
    StatsPoller,
    ingest_webhook,
    reservation_store,
    stats_store,
    webhook_store,
)
from hotelstream.processing.scheduler import PeriodicTask

__all__ = [
    "AccessDeniedError",
    "StreamClient",
    "StreamError",
    "UpstreamError",
    "InventoryResult",
    "load_inventory",
    "summarize_rooms",
    "EVENTS_CATEGORY",
    "ReservationPoller",
    "StatsPoller",
    "ingest_webhook",
    "reservation_store",
    "stats_store",
    "webhook_store",
    "PeriodicTask",
]
