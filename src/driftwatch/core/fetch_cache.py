"""Bounded, expiring in-memory cache of fetched version lists."""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable


class FetchCache:
    """Thread-safe LRU keyed by artifact identity.

    Entries expire ``ttl_seconds`` after they were stored and the least
    recently used entry is evicted once ``max_entries`` is exceeded.
    """

    def __init__(
        self,
        max_entries: int = 512,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, tuple[str, ...]]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> list[str] | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, versions = entry
            if self.ttl_seconds > 0 and self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return list(versions)

    def put(self, key: str, versions: list[str]) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), tuple(versions))
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
