"""Deployed application models produced by an app provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from driftwatch.models import ArtifactType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def artifact_identity(source: str, artifact_type: ArtifactType, artifact_name: str = "") -> str:
    """Deterministic key for caching and de-duplication."""
    identity = f"{source}::{artifact_type.value}"
    if artifact_name:
        identity += f"::{artifact_name}"
    return identity


@dataclass(frozen=True)
class AppArtifact:
    source: str
    artifact_type: ArtifactType
    artifact_name: str = ""
    discovered_at: datetime = field(default_factory=_utcnow, compare=False)
    metadata: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def identity(self) -> str:
        return artifact_identity(self.source, self.artifact_type, self.artifact_name)

    def add_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value

    def to_dict(self) -> dict[str, Any]:
        return {
            "identifier": self.identity,
            "source": self.source,
            "artifactType": self.artifact_type.value,
            "artifactName": self.artifact_name,
            "discoveredAt": self.discovered_at.isoformat(),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, d: dict) -> AppArtifact:
        artifact_type = ArtifactType.from_str(d.get("type") or d.get("artifactType"))
        if artifact_type is None:
            raise ValueError(f"Unknown artifact type in {d!r}")
        return cls(
            source=d.get("source", ""),
            artifact_type=artifact_type,
            artifact_name=d.get("name") or d.get("artifactName") or "",
            metadata={str(k): str(v) for k, v in (d.get("metadata") or {}).items()},
        )


@dataclass
class AppVersion:
    version: str = ""
    discovered_at: datetime = field(default_factory=_utcnow)
    labels: dict[str, str] = field(default_factory=dict)
    artifacts: list[AppArtifact] = field(default_factory=list)


@dataclass
class App:
    id: str = ""
    name: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    first_seen: datetime = field(default_factory=_utcnow)
    last_seen: datetime = field(default_factory=_utcnow)
    current_version: AppVersion | None = None
    versions: list[AppVersion] = field(default_factory=list)

    @classmethod
    def single_version(
        cls,
        id: str,
        name: str,
        version: str,
        artifacts: list[AppArtifact],
        labels: dict[str, str] | None = None,
    ) -> App:
        """Build an app whose only observed revision is also the current one."""
        app_version = AppVersion(version=version, labels=dict(labels or {}), artifacts=list(artifacts))
        return cls(
            id=id,
            name=name,
            labels=dict(labels or {}),
            current_version=app_version,
            versions=[app_version],
        )
