"""Fixed-capacity, in-memory record histories."""
from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Dict, Generic, Iterable, List, TypeVar

from hotelstream.core.utils import utc_now_iso

T = TypeVar("T")

DEFAULT_CAPACITY = 100
WEBHOOK_CAPACITY = 50


class BoundedHistory(Generic[T]):
    """Append-only ring buffer that evicts its oldest entries past ``capacity``.

    Appends and reads hold the same lock and reads return copies, so a reader
    never observes a half-applied batch.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._items: Deque[T] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def extend(self, items: Iterable[T]) -> None:
        with self._lock:
            self._items.extend(items)

    def snapshot(self) -> List[T]:
        with self._lock:
            return list(self._items)

    def latest(self, limit: int) -> List[T]:
        if limit <= 0:
            return []
        with self._lock:
            start = max(len(self._items) - limit, 0)
            return [self._items[i] for i in range(start, len(self._items))]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class HistoryStore:
    """A named set of bounded histories, one per record category."""

    def __init__(self, name: str, categories: Iterable[str], capacity: int = DEFAULT_CAPACITY) -> None:
        self.name = name
        self.capacity = capacity
        self._histories: Dict[str, BoundedHistory[Any]] = {
            category: BoundedHistory(capacity) for category in categories
        }

    @property
    def categories(self) -> List[str]:
        return list(self._histories)

    def _history(self, category: str) -> BoundedHistory[Any]:
        try:
            return self._histories[category]
        except KeyError:
            raise KeyError(f"store {self.name!r} has no category {category!r}") from None

    def append(self, category: str, items: Iterable[Any]) -> None:
        """Add items in order, keeping only the most recent ``capacity``."""

        self._history(category).extend(items)

    def read_all(self, category: str) -> List[Any]:
        """Return a copy of a category's contents in insertion order."""

        return self._history(category).snapshot()

    def latest(self, category: str, limit: int) -> List[Any]:
        return self._history(category).latest(limit)

    def count(self, category: str) -> int:
        return len(self._history(category))

    def clear(self) -> None:
        for history in self._histories.values():
            history.clear()

    def summary(self, limit: int = 10) -> Dict[str, Any]:
        """Per-category counts and most recent entries, plus a generation time."""

        return {
            "store": self.name,
            "counts": {category: self.count(category) for category in self._histories},
            "latest": {category: self.latest(category, limit) for category in self._histories},
            "generated_at": utc_now_iso(),
        }
