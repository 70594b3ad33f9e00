"""Fixed-period background execution of poll functions."""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

from hotelstream.processing.client import AccessDeniedError

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run ``func`` every ``interval`` seconds on a daemon thread.

    Ticks are sequential on the task's own thread, so a slow call delays the
    next tick instead of overlapping it. Errors are logged and the loop keeps
    going; nothing is retried early.
    """

    def __init__(self, name: str, interval: float, func: Callable[[], Any]) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.name = name
        self.interval = interval
        self.func = func
        self.ticks = 0
        self.failures = 0
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def run_once(self) -> bool:
        """Execute one tick; return False when it raised."""

        self.ticks += 1
        try:
            self.func()
        except AccessDeniedError as exc:
            self.failures += 1
            logger.warning("Background poll for %s disabled by access denial: %s", self.name, exc)
            return False
        except Exception:
            self.failures += 1
            logger.exception("Background poll failed for %s", self.name)
            return False
        return True

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info("Started %s every %.1fs", self.name, self.interval)

    def stop(self, timeout: float = 2.0) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=timeout)
        self._thread = None

    def _run(self) -> None:
        while not self._stop.is_set():
            t0 = time.monotonic()
            self.run_once()
            elapsed = time.monotonic() - t0
            self._stop.wait(timeout=max(0.0, self.interval - elapsed))
