"""Data models for driftwatch."""

from __future__ import annotations

import enum


class ArtifactType(enum.Enum):
    HELM = "helm"
    GIT = "git"
    CONTAINER_IMAGE = "containerImage"

    @classmethod
    def from_str(cls, s: str | None) -> ArtifactType | None:
        if not s:
            return None
        wanted = s.strip().lower()
        for member in cls:
            if member.value.lower() == wanted:
                return member
        return None
