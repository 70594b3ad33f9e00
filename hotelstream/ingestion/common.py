"""Shared helpers for turning raw stream payloads into JSON objects."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, Iterator, Optional

logger = logging.getLogger(__name__)


def iter_ndjson(blob: str) -> Iterator[Dict[str, Any]]:
    """Yield each JSON object of a newline-delimited blob.

    Blank lines are ignored. A line that is not valid JSON, or is valid JSON
    but not an object, is logged and skipped without stopping the rest.
    """

    for line in blob.split("\n"):
        if not line.strip():
            continue
        try:
            parsed = json.loads(line)
        except ValueError:
            logger.warning("Failed to parse line: %s", line[:100])
            continue
        if not isinstance(parsed, dict):
            logger.warning("Skipping non-object line: %s", line[:100])
            continue
        yield parsed


def expand_events(raw_events: Iterable[Any]) -> Iterator[Any]:
    """Flatten NDJSON string events into objects; other events pass through."""

    for event in raw_events:
        if isinstance(event, str):
            yield from iter_ndjson(event)
        else:
            yield event


def first_present(source: Dict[str, Any], *keys: str, default: Optional[Any] = None) -> Any:
    """Return the first value among ``keys`` that is present and not None."""

    for key in keys:
        value = source.get(key)
        if value is not None:
            return value
    return default
