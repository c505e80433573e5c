"""Fixed-delay background runner."""

from __future__ import annotations

import logging
import threading
from typing import Callable

logger = logging.getLogger(__name__)


class PeriodicRefresher:
    """Run *task* repeatedly on a daemon thread until stopped.

    The delay is measured from the end of one run to the start of the next.
    ``initial_delay_seconds`` defaults to the interval, so a caller that
    already refreshed at startup does not immediately refresh again.
    """

    def __init__(
        self,
        task: Callable[[], object],
        interval_seconds: float,
        initial_delay_seconds: float | None = None,
        name: str = "driftwatch-refresh",
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.task = task
        self.interval_seconds = interval_seconds
        self.initial_delay_seconds = (
            interval_seconds if initial_delay_seconds is None else initial_delay_seconds
        )
        self.name = name
        self.run_count = 0
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            self._stop.clear()
            self._thread = threading.Thread(target=self._loop, name=self.name, daemon=True)
            self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        """Prevent further runs; a run already in progress is allowed to finish."""
        self._stop.set()
        with self._lock:
            thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _loop(self) -> None:
        delay = self.initial_delay_seconds
        while not self._stop.wait(delay):
            try:
                self.task()
            except Exception:
                logger.exception("Scheduled refresh failed")
            self.run_count += 1
            delay = self.interval_seconds
