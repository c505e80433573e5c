"""In-memory stores for refresh results and tracked artifacts."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Iterable, Protocol

from driftwatch.models.app import AppArtifact
from driftwatch.models.outdated import OutdatedArtifactInfo


class ResultStore(Protocol):
    def replace_all(self, infos: Iterable[OutdatedArtifactInfo]) -> None: ...

    def find_all(self, now: datetime) -> list[OutdatedArtifactInfo]: ...

    def latest_update(self, now: datetime) -> datetime | None: ...


class ArtifactRepository(Protocol):
    def save(self, artifact: AppArtifact) -> None: ...

    def find_all(self) -> list[AppArtifact]: ...


class OutdatedResultStore:
    """Outdated-artifact records with per-entry time to live.

    A refresh pass replaces the whole map in one step, so readers see either
    the previous pass or the new one and never a mixture of both.
    """

    def __init__(self) -> None:
        self._entries: dict[str, OutdatedArtifactInfo] = {}
        self._lock = threading.Lock()

    def replace_all(self, infos: Iterable[OutdatedArtifactInfo]) -> None:
        fresh = {info.identity: info for info in infos}
        with self._lock:
            self._entries = fresh

    def find_all(self, now: datetime) -> list[OutdatedArtifactInfo]:
        with self._lock:
            expired = [k for k, v in self._entries.items() if v.is_expired(now)]
            for key in expired:
                del self._entries[key]
            return list(self._entries.values())

    def latest_update(self, now: datetime) -> datetime | None:
        entries = self.find_all(now)
        if not entries:
            return None
        return max(e.last_updated for e in entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ArtifactStore:
    """Every artifact seen during refresh passes, keyed by identity."""

    def __init__(self) -> None:
        self._artifacts: dict[str, AppArtifact] = {}
        self._lock = threading.Lock()

    def save(self, artifact: AppArtifact) -> None:
        with self._lock:
            self._artifacts[artifact.identity] = artifact

    def find_all(self) -> list[AppArtifact]:
        with self._lock:
            return sorted(self._artifacts.values(), key=lambda a: a.identity)
