"""Semver comparison utilities."""

from __future__ import annotations

import logging
from typing import Iterable

from semver import Version

logger = logging.getLogger(__name__)

ParsedVersion = Version


def _parse_relaxed(v: str) -> Version | None:
    """``X.Y`` -> ``X.Y.0`` and ``X.Y-pre`` -> ``X.Y.0-pre``; nothing looser."""
    core = v.split("-", 1)[0]
    if "+" in v or core.count(".") != 1:
        return None
    try:
        return Version.parse(v, optional_minor_and_patch=True)
    except ValueError:
        return None


def parse_version(v: str | None) -> Version | None:
    """Parse a version string, returning None on failure.

    Accepts an optional leading 'v'. Strings that are not strict semver are
    retried as ``X.Y`` or ``X.Y-pre`` with a zero patch.
    """
    if not v:
        return None
    v = v.strip()
    if v[:1] in ("v", "V"):
        v = v[1:]
    try:
        return Version.parse(v)
    except ValueError:
        return _parse_relaxed(v)


def is_pre_release(v: Version) -> bool:
    return v.prerelease is not None


def same_line(a: Version, b: Version, minor: bool = False) -> bool:
    """True if *a* and *b* share a major (and minor, if asked)."""
    if a.major != b.major:
        return False
    return not minor or a.minor == b.minor


def normalize_version(v: str | None) -> str | None:
    """Return the canonical string for *v*, or None if it does not parse."""
    parsed = parse_version(v)
    return str(parsed) if parsed is not None else None


def parse_all(versions: Iterable[str]) -> list[Version]:
    """Parse every string, dropping (and logging) the ones that fail."""
    parsed: list[Version] = []
    for raw in versions:
        p = parse_version(raw)
        if p is None:
            logger.warning("Skipping unparseable version %r", raw)
            continue
        parsed.append(p)
    return parsed


def sort_versions_desc(versions: Iterable[str]) -> list[str]:
    """Normalize, de-duplicate and sort version strings, newest first."""
    result: list[str] = []
    seen: set[str] = set()
    for p in sorted(parse_all(versions), reverse=True):
        text = str(p)
        if text not in seen:
            seen.add(text)
            result.append(text)
    return result


def classify_update(current: str, latest: str) -> str:
    """Classify the update type between two version strings.

    Returns: "major", "minor", "patch", "up-to-date", or "unknown".
    """
    cur = parse_version(current)
    lat = parse_version(latest)

    if cur is None or lat is None:
        return "unknown"
    if lat <= cur:
        return "up-to-date"
    if lat.major > cur.major:
        return "major"
    if lat.minor > cur.minor:
        return "minor"
    return "patch"
