"""Optional JSON snapshots of store contents on disk.

Snapshots are a convenience for inspecting recent traffic after a restart;
they are not a system of record and are never read while serving requests.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List

logger = logging.getLogger(__name__)

SNAPSHOT_CAPACITY = 500

FILES = {
    "events": "events.json",
    "stats": "stats.json",
    "balances": "balances.json",
    "webhook": "webhook.json",
}


def _describe(data: Any) -> str:
    return str(len(data)) if isinstance(data, list) else "object"


class SnapshotStore:
    """Load and save JSON documents under a single data directory."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def _ensure_dir(self) -> None:
        if not self.data_dir.exists():
            self.data_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created data directory %s", self.data_dir)

    def path_for(self, filename: str) -> Path:
        return self.data_dir / filename

    def load(self, filename: str, default: Any = None) -> Any:
        """Return the parsed document, or ``default`` (an empty list) when it
        is missing or unreadable."""

        fallback = [] if default is None else default
        path = self.path_for(filename)
        if not path.exists():
            return fallback

        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Error loading %s: %s", filename, exc)
            return fallback

        logger.info("Loaded %s entries from %s", _describe(parsed), filename)
        return parsed

    def save(self, filename: str, data: Any) -> None:
        """Write ``data`` as indented JSON; failures are logged, not raised."""

        try:
            self._ensure_dir()
            self.path_for(filename).write_text(json.dumps(data, indent=2), encoding="utf-8")
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Error saving %s: %s", filename, exc)
            return
        logger.info("Saved %s entries to %s", _describe(data), filename)

    def append(self, filename: str, items: Iterable[Any], max_items: int = SNAPSHOT_CAPACITY) -> List[Any]:
        """Extend the stored list, trimming the oldest entries past ``max_items``."""

        existing = self.load(filename, [])
        if not isinstance(existing, list):
            existing = []

        existing.extend(items)
        if len(existing) > max_items:
            existing = existing[-max_items:]

        self.save(filename, existing)
        return existing
