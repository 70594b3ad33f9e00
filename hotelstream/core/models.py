"""Data models for classified PMS stream events."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Union

STATS_SNAPSHOT = "STATS_SNAPSHOT"
GENERIC_STAT = "GENERIC_STAT"
BALANCE = "BALANCE"
RAW = "RAW"


@dataclass(frozen=True)
class EventRecord:
    """Fields shared by every record produced by the classifier.

    - id: ``event_id`` or ``id`` of the source event
    - timestamp: ISO-8601 string (``timestamp``, ``created_at`` or capture time)
    - event_type: free-text hint (``event_type`` or ``type``)
    - property_id / property_code: hotel identifiers
    - stream_id / stream_name / timezone: stream metadata
    """

    id: Optional[Any] = None
    timestamp: Optional[str] = None
    event_type: str = ""
    property_id: Optional[str] = None
    property_code: Optional[str] = None
    stream_id: Optional[str] = None
    stream_name: Optional[str] = None
    timezone: Optional[str] = None
    category: str = RAW

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain dictionary representation for JSON responses."""

        return asdict(self)


@dataclass(frozen=True)
class StatsSnapshotRecord(EventRecord):
    """A statistics snapshot with metrics keyed by taxonomy field name."""

    category: str = STATS_SNAPSHOT
    type: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    change_events: Optional[Any] = None
    raw_payload: Any = None


@dataclass(frozen=True)
class GenericStatRecord(EventRecord):
    """A statistic recognized only by its event type name."""

    category: str = GENERIC_STAT
    metric_name: str = ""
    value: Any = None
    period: Any = None
    raw_payload: Any = None


@dataclass(frozen=True)
class BalanceRecord(EventRecord):
    """A folio, payment, or balance movement for a guest."""

    category: str = BALANCE
    guest_name: Optional[str] = None
    room_number: Optional[str] = None
    amount: Any = None
    currency: str = "USD"
    folio_id: Optional[str] = None
    description: Optional[str] = None
    raw_payload: Any = None


@dataclass(frozen=True)
class RawRecord(EventRecord):
    """Catch-all for events no rule recognized."""

    category: str = RAW
    raw_payload: Any = None


@dataclass(frozen=True)
class ReservationDetails:
    reservation_id: Optional[str] = None
    confirmation_number: Optional[str] = None
    status: Optional[str] = None
    guest_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    room_number: Optional[str] = None
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    adults: Optional[int] = None
    children: Optional[int] = None


@dataclass(frozen=True)
class ReservationRecord:
    """Flattened primary-stream event; ``data`` is verbatim for non-reservations."""

    event_id: Optional[str] = None
    type: Optional[str] = None
    timestamp: Optional[str] = None
    hotel_id: Optional[str] = None
    data: Union[ReservationDetails, Dict[str, Any], None] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


StatsEntry = Union[StatsSnapshotRecord, GenericStatRecord]


@dataclass
class ClassifiedBatch:
    """Records produced from one batch, split by destination bucket."""

    stats: List[StatsEntry] = field(default_factory=list)
    balances: List[BalanceRecord] = field(default_factory=list)
    raw: List[RawRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.stats) + len(self.balances) + len(self.raw)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stats": [record.to_dict() for record in self.stats],
            "balances": [record.to_dict() for record in self.balances],
            "raw": [record.to_dict() for record in self.raw],
        }
