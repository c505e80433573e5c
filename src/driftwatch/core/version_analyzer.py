"""Classify candidate versions against a deployed version."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from driftwatch.utils.version_compare import ParsedVersion, is_pre_release, parse_all, parse_version, same_line


@dataclass
class VersionAnalysis:
    current_version: str
    latest_overall_version: str | None = None
    latest_ga_release: str | None = None
    latest_pre_release: str | None = None
    next_minor_version: str | None = None
    next_major_version: str | None = None
    major_version_delta: int | None = None
    minor_version_delta: int | None = None
    outdated: bool = False
    available_versions: list[str] = field(default_factory=list)


def _max(versions: Iterable[ParsedVersion]) -> ParsedVersion | None:
    return max(versions, default=None)


def _as_str(v: ParsedVersion | None) -> str | None:
    return str(v) if v is not None else None


def _latest_overall(parsed: list[ParsedVersion]) -> ParsedVersion | None:
    return _max(parsed)


def _latest_ga(parsed: list[ParsedVersion]) -> ParsedVersion | None:
    return _max(p for p in parsed if not is_pre_release(p))


def _latest_pre(parsed: list[ParsedVersion]) -> ParsedVersion | None:
    return _max(p for p in parsed if is_pre_release(p))


def _next_in_line(
    current: ParsedVersion, parsed: list[ParsedVersion], same_minor: bool
) -> ParsedVersion | None:
    return _max(
        p for p in parsed
        if not is_pre_release(p) and same_line(p, current, minor=same_minor) and p >= current
    )


def latest_overall(candidates: Iterable[str]) -> str | None:
    """Highest candidate by semver precedence, pre-releases included."""
    return _as_str(_latest_overall(parse_all(candidates)))


def latest_ga(candidates: Iterable[str]) -> str | None:
    """Highest candidate without a pre-release component."""
    return _as_str(_latest_ga(parse_all(candidates)))


def latest_pre_release(candidates: Iterable[str]) -> str | None:
    """Highest candidate carrying a pre-release component."""
    return _as_str(_latest_pre(parse_all(candidates)))


def is_newer_version(current: str | None, target: str | None) -> bool:
    """True iff *target* parses and is strictly greater than *current*."""
    cur = parse_version(current)
    tgt = parse_version(target)
    if cur is None or tgt is None:
        return False
    return tgt > cur


def is_outdated(current: str | None, candidates: Iterable[str]) -> bool:
    """Compare against the latest GA release, or the latest overall if no GA exists."""
    parsed = parse_all(candidates)
    target = _latest_ga(parsed) or _latest_overall(parsed)
    cur = parse_version(current)
    if cur is None or target is None:
        return False
    return target > cur


def next_minor(current: str | None, candidates: Iterable[str]) -> str | None:
    """Latest GA patch within the current major.minor line (may equal current)."""
    cur = parse_version(current)
    if cur is None:
        return None
    return _as_str(_next_in_line(cur, parse_all(candidates), same_minor=True))


def next_major(current: str | None, candidates: Iterable[str]) -> str | None:
    """Latest GA release within the current major line (may equal current)."""
    cur = parse_version(current)
    if cur is None:
        return None
    return _as_str(_next_in_line(cur, parse_all(candidates), same_minor=False))


def major_version_delta(current: str | None, target: str | None) -> int | None:
    cur = parse_version(current)
    tgt = parse_version(target)
    if cur is None or tgt is None:
        return None
    return max(tgt.major - cur.major, 0)


def minor_version_delta(current: str | None, target: str | None) -> int | None:
    cur = parse_version(current)
    tgt = parse_version(target)
    if cur is None or tgt is None or not same_line(cur, tgt):
        return None
    return max(tgt.minor - cur.minor, 0)


def analyze(current: str, candidates: Iterable[str]) -> VersionAnalysis:
    """Run every comparison in one pass over the parsed candidates.

    A next-minor equal to the current version carries no information and is
    reported as absent. Deltas are measured against the latest release
    (major) and the top of the current major line (minor).
    """
    candidates = list(candidates)
    parsed = parse_all(candidates)
    result = VersionAnalysis(current_version=current, available_versions=candidates)

    overall = _latest_overall(parsed)
    ga = _latest_ga(parsed)
    pre = _latest_pre(parsed)
    result.latest_overall_version = _as_str(overall)
    result.latest_ga_release = _as_str(ga)
    result.latest_pre_release = _as_str(pre)

    cur = parse_version(current)
    if cur is None:
        return result

    target = ga or overall
    result.outdated = target is not None and target > cur

    minor_line = _next_in_line(cur, parsed, same_minor=True)
    major_line = _next_in_line(cur, parsed, same_minor=False)
    if minor_line is not None and minor_line > cur:
        result.next_minor_version = str(minor_line)
    result.next_major_version = _as_str(major_line)

    if target is not None:
        result.major_version_delta = max(target.major - cur.major, 0)
    if major_line is not None:
        result.minor_version_delta = max(major_line.minor - cur.minor, 0)
    return result
