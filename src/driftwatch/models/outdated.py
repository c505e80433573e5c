"""Outdated artifact result model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any


@dataclass
class OutdatedArtifactInfo:
    app_name: str
    app_id: str
    deployed_app_version: str
    artifact_source: str
    artifact_type: str
    current_artifact_version: str
    latest_overall_version: str | None = None
    latest_ga_release: str | None = None
    latest_pre_release: str | None = None
    next_minor_version: str | None = None
    next_major_version: str | None = None
    major_version_delta: int | None = None
    minor_version_delta: int | None = None
    available_versions: list[str] = field(default_factory=list)
    artifact_identity: str = ""
    last_updated: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    time_to_live: int = 0  # seconds; 0 means no expiry

    @property
    def identity(self) -> str:
        return f"{self.app_id}::{self.artifact_identity or self.artifact_source}"

    @property
    def expires_at(self) -> datetime | None:
        if self.time_to_live <= 0:
            return None
        return self.last_updated + timedelta(seconds=self.time_to_live)

    def is_expired(self, now: datetime) -> bool:
        expires = self.expires_at
        return expires is not None and expires <= now

    def stamped(self, now: datetime, time_to_live: int) -> OutdatedArtifactInfo:
        """Copy with refreshed bookkeeping fields."""
        return replace(self, last_updated=now, time_to_live=time_to_live)

    def to_dict(self) -> dict[str, Any]:
        return {
            "appName": self.app_name,
            "appId": self.app_id,
            "deployedAppVersion": self.deployed_app_version,
            "artifactSource": self.artifact_source,
            "artifactType": self.artifact_type,
            "currentArtifactVersion": self.current_artifact_version,
            "latestOverallVersion": self.latest_overall_version,
            "latestGARelease": self.latest_ga_release,
            "latestPreRelease": self.latest_pre_release,
            "nextMinorVersion": self.next_minor_version,
            "nextMajorVersion": self.next_major_version,
            "majorVersionDelta": self.major_version_delta,
            "minorVersionDelta": self.minor_version_delta,
            "availableVersions": list(self.available_versions),
            "lastUpdated": self.last_updated.isoformat(),
            "timeToLive": self.time_to_live,
        }
