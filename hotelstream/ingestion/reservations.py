"""Normalizer for primary-stream (reservation) events."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from hotelstream.core.models import ReservationDetails, ReservationRecord
from hotelstream.core.utils import utc_now_iso
from hotelstream.ingestion.common import expand_events

logger = logging.getLogger(__name__)

RESERVATION_TYPE = "RESERVATION"


def _guest_name(guest: Dict[str, Any]) -> str:
    first = guest.get("first_name") or ""
    last = guest.get("last_name") or ""
    return f"{first} {last}".strip()


def _reservation_details(reservation: Dict[str, Any]) -> ReservationDetails:
    guest = reservation.get("guest_info")
    if not isinstance(guest, dict):
        guest = {}

    return ReservationDetails(
        reservation_id=reservation.get("id"),
        confirmation_number=reservation.get("reservation_no"),
        status=reservation.get("status"),
        guest_name=_guest_name(guest),
        email=guest.get("email"),
        phone=guest.get("phone"),
        room_number=reservation.get("room_number"),
        check_in=reservation.get("check_in_date"),
        check_out=reservation.get("check_out_date"),
        adults=reservation.get("adult_count"),
        children=reservation.get("child_count"),
    )


def normalize_event(event: Any) -> ReservationRecord:
    """Flatten one event; only its ``payload`` object is read."""

    payload = event.get("payload") if isinstance(event, dict) else None
    if not isinstance(payload, dict):
        payload = {}

    event_type = payload.get("event_type")
    reservation = payload.get("reservation")
    if event_type == RESERVATION_TYPE and isinstance(reservation, dict):
        data: Any = _reservation_details(reservation)
    else:
        data = payload

    return ReservationRecord(
        event_id=payload.get("event_id"),
        type=event_type,
        timestamp=payload.get("event_time") or utc_now_iso(),
        hotel_id=payload.get("property_id"),
        data=data,
    )


def normalize(raw_events: Iterable[Any]) -> List[ReservationRecord]:
    """Normalize a batch into reservation records, one per event, in order."""

    records = [normalize_event(event) for event in expand_events(raw_events)]
    logger.debug("Normalized %d primary-stream events", len(records))
    return records
