"""Classifier for the statistics and balances stream.

Each event is matched against an ordered rule table; the first rule whose
predicate accepts the event builds the single record for it. The order is
fixed: nested ``statistics`` snapshot, flat snapshot, balance, generic stat,
and finally the raw catch-all.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from hotelstream.core.models import (
    BalanceRecord,
    ClassifiedBatch,
    EventRecord,
    GenericStatRecord,
    RawRecord,
    StatsSnapshotRecord,
)
from hotelstream.core.utils import utc_now_iso
from hotelstream.ingestion.common import first_present, iter_ndjson
from hotelstream.ingestion.taxonomy import (
    BALANCE_KEYWORDS,
    GENERIC_STAT_KEYWORDS,
    KNOWN_METRICS,
    matches_any,
    select_known_metrics,
)

logger = logging.getLogger(__name__)

STATS_BUCKET = "stats"
BALANCES_BUCKET = "balances"
RAW_BUCKET = "raw"


@dataclass(frozen=True)
class EventView:
    """An object event with its base fields and the payload the rules read."""

    event: Dict[str, Any]
    payload: Dict[str, Any]
    statistics: Optional[Dict[str, Any]]
    base: Dict[str, Any]

    @property
    def event_type(self) -> str:
        return self.base["event_type"]


@dataclass(frozen=True)
class Rule:
    name: str
    bucket: str
    matches: Callable[[EventView], bool]
    build: Callable[[EventView], EventRecord]


def base_fields(event: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the fields every record carries, defaulting missing ones."""

    return {
        "id": first_present(event, "event_id", "id"),
        "timestamp": event.get("timestamp") or event.get("created_at") or utc_now_iso(),
        "event_type": event.get("event_type") or event.get("type") or "",
        "property_id": event.get("property_id"),
        "property_code": event.get("property_code"),
        "stream_id": event.get("stream_id"),
        "stream_name": event.get("stream_name"),
        "timezone": event.get("timezone"),
    }


def build_view(event: Dict[str, Any]) -> EventView:
    statistics = event.get("statistics")
    if not isinstance(statistics, dict):
        statistics = None

    payload = event
    nested = event.get("payload")
    if statistics is None and isinstance(nested, dict):
        payload = nested

    return EventView(event=event, payload=payload, statistics=statistics, base=base_fields(event))


def _has_statistics(view: EventView) -> bool:
    return view.statistics is not None


def _nested_snapshot(view: EventView) -> StatsSnapshotRecord:
    metrics = select_known_metrics(view.statistics) or dict(view.statistics)
    logger.info(
        "Stats snapshot captured: %d metrics from %s type",
        len(metrics),
        view.event.get("type") or "unknown",
    )
    return StatsSnapshotRecord(
        **view.base,
        type=view.event.get("type"),
        metrics=metrics,
        change_events=view.event.get("change_events") or None,
        raw_payload=view.event,
    )


def _has_flat_metrics(view: EventView) -> bool:
    return any(key in KNOWN_METRICS for key in view.payload)


def _flat_snapshot(view: EventView) -> StatsSnapshotRecord:
    metrics = select_known_metrics(view.payload)
    logger.info("Stats snapshot: %d metrics captured", len(metrics))
    return StatsSnapshotRecord(**view.base, metrics=metrics, raw_payload=view.payload)


def _is_balance(view: EventView) -> bool:
    return matches_any(view.event_type, BALANCE_KEYWORDS)


def _balance(view: EventView) -> BalanceRecord:
    payload = view.payload
    return BalanceRecord(
        **view.base,
        guest_name=first_present(payload, "guest_name", "guestName"),
        room_number=first_present(payload, "room_number", "roomNumber"),
        amount=first_present(payload, "amount", "balance"),
        currency=payload.get("currency") or "USD",
        folio_id=first_present(payload, "folio_id", "folioId"),
        description=payload.get("description"),
        raw_payload=payload,
    )


def _is_generic_stat(view: EventView) -> bool:
    return matches_any(view.event_type, GENERIC_STAT_KEYWORDS)


def _generic_stat(view: EventView) -> GenericStatRecord:
    payload = view.payload
    return GenericStatRecord(
        **view.base,
        metric_name=view.event_type,
        value=first_present(payload, "value", "amount"),
        period=first_present(payload, "period", "date"),
        raw_payload=payload,
    )


def _always(view: EventView) -> bool:
    return True


def _raw(view: EventView) -> RawRecord:
    logger.info("Unknown event type: %r keys: %s", view.event_type, list(view.event)[:10])
    return RawRecord(**view.base, raw_payload=view.event)


RULES: tuple[Rule, ...] = (
    Rule("nested_snapshot", STATS_BUCKET, _has_statistics, _nested_snapshot),
    Rule("flat_snapshot", STATS_BUCKET, _has_flat_metrics, _flat_snapshot),
    Rule("balance", BALANCES_BUCKET, _is_balance, _balance),
    Rule("generic_stat", STATS_BUCKET, _is_generic_stat, _generic_stat),
    Rule("raw", RAW_BUCKET, _always, _raw),
)


def match_rule(view: EventView, rules: Iterable[Rule] = RULES) -> Rule:
    """Return the first rule accepting the event."""

    for rule in rules:
        if rule.matches(view):
            return rule
    raise LookupError("no classification rule matched")


def categorize_event(event: Dict[str, Any]) -> tuple[str, EventRecord]:
    """Classify a single object event into ``(bucket, record)``."""

    view = build_view(event)
    rule = match_rule(view)
    return rule.bucket, rule.build(view)


def _add(batch: ClassifiedBatch, bucket: str, record: EventRecord) -> None:
    getattr(batch, bucket).append(record)


def _classify_object(event: Any, batch: ClassifiedBatch) -> None:
    if not isinstance(event, dict):
        logger.warning("Failed to parse event of type %s", type(event).__name__)
        _add(batch, RAW_BUCKET, RawRecord(raw_payload=event))
        return

    try:
        bucket, record = categorize_event(event)
    except Exception:
        logger.exception("Failed to classify event %s", event.get("event_id") or event.get("id"))
        bucket, record = RAW_BUCKET, RawRecord(raw_payload=event)
    _add(batch, bucket, record)


def classify(raw_events: Iterable[Any]) -> ClassifiedBatch:
    """Classify a batch of raw events into stats, balances, and raw records.

    String events are treated as NDJSON blobs and every parsed line is
    classified on its own. Malformed lines and events never abort the batch.
    """

    batch = ClassifiedBatch()
    for event in raw_events:
        if isinstance(event, str):
            for parsed in iter_ndjson(event):
                _classify_object(parsed, batch)
        else:
            _classify_object(event, batch)

    logger.debug(
        "Classified %d records (%d stats, %d balances, %d raw)",
        batch.total,
        len(batch.stats),
        len(batch.balances),
        len(batch.raw),
    )
    return batch
