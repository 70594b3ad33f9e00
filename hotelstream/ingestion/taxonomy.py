"""Known metric names of the PMS statistics stream and the keyword tables used
to infer event kinds from free-text type names."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional


class MetricCategory(str, Enum):
    GUEST_RESERVATION = "guest_reservation"
    ARRIVAL_DEPARTURE = "arrival_departure"
    ROOM_STATUS = "room_status"
    REVENUE = "revenue"
    OCCUPANCY = "occupancy"


GUEST_RESERVATION_FIELDS = (
    "adults",
    "children",
    "total_guests",
    "transient_in_house_guests",
    "group_in_house_guests",
    "total_groups",
    "booked_today",
    "booked_room_nights_today",
    "booked_cancellations_today",
    "cancelled",
    "cancelled_reservations_arriving_today",
    "cancelled_with_penalty_reservations_arriving_today",
    "checked_in_reservations",
    "departed_reservations",
    "no_show",
    "same_day_bookings",
    "same_day_checkouts",
    "stay_overs",
)

ARRIVAL_DEPARTURE_FIELDS = (
    "total_arriving_guests",
    "total_arrivals_tomorrow",
    "total_departure_rooms_tomorrow",
    "total_guests_arriving_tomorrow",
    "total_guests_departing_tomorrow",
)

ROOM_STATUS_FIELDS = (
    "room_sold",
    "room_sold_without_comp_rooms",
    "room_available",
    "room_vacant",
    "room_clean",
    "room_dirty",
    "clean_rooms",
    "dirty_rooms",
    "ready_rooms",
    "room_down",
    "oos_rooms",
    "oons_rooms",
    "occupied_single_rooms_count",
    "occupied_double_rooms_count",
    "comp_rooms",
    "house_rooms",
    "zero_rate",
)

REVENUE_FIELDS = (
    "individual_room_revenue",
    "individual_room_revenue_in_house",
    "group_master_room_revenue_in_house",
    "average_daily_rate",
    "adr_with_comp_room",
    "adr_without_comp_room",
    "revenue_per_available_room_with_down_room",
    "revenue_per_available_room_without_down_room",
)

OCCUPANCY_FIELDS = (
    "occupancy_percent_for_tomorrow",
    "occupancy_percent_for_next_7_days",
    "occupancy_percent_for_next_14_days",
    "occupancy_percent_for_next_31_days",
    "occupancy_percentage_with_down_rooms",
    "occupancy_percentage_without_down_rooms",
)

FIELD_TAXONOMY: Dict[str, MetricCategory] = {
    **{name: MetricCategory.GUEST_RESERVATION for name in GUEST_RESERVATION_FIELDS},
    **{name: MetricCategory.ARRIVAL_DEPARTURE for name in ARRIVAL_DEPARTURE_FIELDS},
    **{name: MetricCategory.ROOM_STATUS for name in ROOM_STATUS_FIELDS},
    **{name: MetricCategory.REVENUE for name in REVENUE_FIELDS},
    **{name: MetricCategory.OCCUPANCY for name in OCCUPANCY_FIELDS},
}

KNOWN_METRICS = frozenset(FIELD_TAXONOMY)

# Substrings matched against the lower-cased event type, in priority order.
BALANCE_KEYWORDS = ("balance", "folio", "payment", "charge", "transaction")
GENERIC_STAT_KEYWORDS = ("stat", "occupancy", "revenue", "adr", "revpar", "room")

OTHER_GROUP = "other"


def metric_category(name: str) -> Optional[MetricCategory]:
    return FIELD_TAXONOMY.get(name)


def select_known_metrics(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep only taxonomy keys, preserving the source order."""

    return {key: value for key, value in mapping.items() if key in KNOWN_METRICS}


def group_metrics(metrics: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Bucket metrics by taxonomy category; unknown names land under ``other``."""

    grouped: Dict[str, Dict[str, Any]] = {}
    for name, value in metrics.items():
        category = FIELD_TAXONOMY.get(name)
        key = category.value if category else OTHER_GROUP
        grouped.setdefault(key, {})[name] = value
    return grouped


def matches_any(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = (text or "").lower()
    return any(keyword in lowered for keyword in keywords)
