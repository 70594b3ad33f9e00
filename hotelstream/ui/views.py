"""Row builders shared by the Streamlit dashboard and other tabular surfaces."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import requests

from hotelstream.ingestion.taxonomy import group_metrics

DEFAULT_API_URL = "http://localhost:3000"


def fetch_json(base_url: str, path: str, session: Optional[requests.Session] = None, timeout: float = 10) -> Any:
    """GET a JSON document from the hotelstream API."""

    http = session or requests
    response = http.get(f"{base_url.rstrip('/')}{path}", timeout=timeout)
    response.raise_for_status()
    return response.json()


def _sanitize(value: Any) -> Any:
    if isinstance(value, str):
        return " ".join(value.split())
    return value


def metric_rows(stats: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten snapshot metrics into one row per (snapshot, metric)."""

    rows: List[Dict[str, Any]] = []
    for entry in stats:
        metrics = entry.get("metrics")
        if metrics is None:
            # Generic stats carry a single named value.
            rows.append(
                {
                    "timestamp": entry.get("timestamp"),
                    "group": "generic",
                    "metric": _sanitize(entry.get("metric_name")),
                    "value": entry.get("value"),
                }
            )
            continue
        for group, values in group_metrics(metrics).items():
            for name, value in values.items():
                rows.append(
                    {
                        "timestamp": entry.get("timestamp"),
                        "group": group,
                        "metric": name,
                        "value": value,
                    }
                )
    return rows


def balance_rows(balances: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Project balance records onto the columns shown in the dashboard."""

    columns = ("timestamp", "event_type", "guest_name", "room_number", "amount", "currency", "folio_id", "description")
    return [{column: _sanitize(entry.get(column)) for column in columns} for entry in balances]


def reservation_rows(events: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """One row per reservation event; other event types show only their type."""

    rows: List[Dict[str, Any]] = []
    for event in events:
        data = event.get("data") or {}
        rows.append(
            {
                "timestamp": event.get("timestamp"),
                "type": event.get("type"),
                "guest": _sanitize(data.get("guest_name")) if event.get("type") == "RESERVATION" else None,
                "confirmation": data.get("confirmation_number"),
                "room": data.get("room_number"),
                "check_in": data.get("check_in"),
                "check_out": data.get("check_out"),
            }
        )
    return rows
