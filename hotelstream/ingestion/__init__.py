"""Event ingestion: NDJSON splitting, classification, and normalization."""
from hotelstream.ingestion.classifier import RULES, categorize_event, classify
from hotelstream.ingestion.common import expand_events, iter_ndjson
from hotelstream.ingestion.reservations import normalize, normalize_event

__all__ = [
    "RULES",
    "categorize_event",
    "classify",
    "expand_events",
    "iter_ndjson",
    "normalize",
    "normalize_event",
]
