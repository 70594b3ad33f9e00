"""Room inventory lookups and occupancy summaries."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from hotelstream.processing.client import AccessDeniedError, StreamClient, StreamError

logger = logging.getLogger(__name__)

STATUS_OK = "OK"
STATUS_DISABLED = "DISABLED"
STATUS_ERROR = "ERROR"


@dataclass
class InventoryResult:
    status: str
    rooms: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_inventory(client: StreamClient, property_id: str) -> InventoryResult:
    """Fetch rooms, reporting access denial as a ``DISABLED`` status."""

    try:
        body = client.room_inventory(property_id)
    except AccessDeniedError:
        logger.warning("Inventory API access denied. Requires valid PMS Core API credentials.")
        return InventoryResult(
            status=STATUS_DISABLED,
            error="Access Denied",
            message="Inventory authentication failed. Please verify PMS API credentials.",
        )
    except StreamError as exc:
        logger.error("Inventory fetch error: %s", exc)
        return InventoryResult(status=STATUS_ERROR, error="Inventory Fetch Failed", message=str(exc))

    rooms = body if isinstance(body, list) else []
    return InventoryResult(status=STATUS_OK, rooms=rooms)


def summarize_rooms(rooms: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    """Count rooms by state; out of order wins over occupied, occupied over dirty."""

    summary = {"total_rooms": 0, "available": 0, "occupied": 0, "dirty": 0, "out_of_order": 0}
    for room in rooms:
        summary["total_rooms"] += 1
        occupied = room.get("occupancy_status") == "Occupied" or room.get("status") == "Occupied"
        dirty = room.get("housekeeping_status") == "Dirty"
        if room.get("status") == "OutOfOrder":
            summary["out_of_order"] += 1
        elif occupied:
            summary["occupied"] += 1
        elif dirty:
            summary["dirty"] += 1
        else:
            summary["available"] += 1
    return summary
