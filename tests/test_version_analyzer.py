import pytest

from driftwatch.core import version_analyzer as va
from driftwatch.utils.version_compare import parse_version, sort_versions_desc

DEMO = ["1.2.3", "1.10.0", "1.3.0-alpha"]


def test_demo_scenario():
    result = va.analyze("1.2.3", DEMO)

    assert result.latest_overall_version == "1.10.0"
    assert result.latest_ga_release == "1.10.0"
    assert result.latest_pre_release == "1.3.0-alpha"
    assert result.outdated is True
    assert result.next_minor_version is None
    assert result.next_major_version == "1.10.0"
    assert result.major_version_delta == 0
    assert result.minor_version_delta == 8


def test_public_helpers_agree_with_analyze():
    assert va.latest_ga(DEMO) == "1.10.0"
    assert va.latest_pre_release(DEMO) == "1.3.0-alpha"
    assert va.latest_overall(DEMO) == "1.10.0"
    assert va.is_outdated("1.2.3", DEMO)
    assert va.next_major("1.2.3", DEMO) == "1.10.0"
    assert va.next_minor("1.2.3", DEMO) == "1.2.3"


def test_latest_overall_is_head_of_descending_sort():
    candidates = ["0.9.0", "2.0.0-rc.1", "1.5.0", "junk"]
    assert va.latest_overall(candidates) == sort_versions_desc(candidates)[0] == "2.0.0-rc.1"


def test_ga_and_prerelease_are_separated():
    candidates = ["1.0.0", "1.1.0-beta", "1.1.0-rc.1", "0.9.0"]
    assert parse_version(va.latest_ga(candidates)).prerelease is None
    assert parse_version(va.latest_pre_release(candidates)).prerelease is not None


def test_no_ga_falls_back_to_latest_overall():
    candidates = ["2.0.0-beta", "2.0.0-rc.1"]
    assert va.latest_ga(candidates) is None
    assert va.is_outdated("1.0.0", candidates)
    assert not va.is_outdated("2.0.0", candidates)


def test_next_minor_stays_on_line():
    candidates = ["1.2.4", "1.2.9", "1.3.0", "2.0.0", "1.2.10-rc.1"]
    assert va.next_minor("1.2.3", candidates) == "1.2.9"
    assert va.next_major("1.2.3", candidates) == "1.3.0"
    result = va.analyze("1.2.3", candidates)
    assert result.next_minor_version == "1.2.9"
    assert result.major_version_delta == 1
    assert result.minor_version_delta == 1


@pytest.mark.parametrize("a,b", [("1.0.0", "1.0.1"), ("1.0.0-rc.1", "1.0.0"), ("2.0.0", "1.9.9"), ("1.0.0", "1.0.0")])
def test_is_newer_version_matches_precedence(a, b):
    assert va.is_newer_version(a, b) == (parse_version(b) > parse_version(a))


def test_unparseable_current_yields_no_comparisons():
    result = va.analyze("latest", DEMO)
    assert result.outdated is False
    assert result.latest_ga_release == "1.10.0"
    assert result.next_major_version is None
    assert result.major_version_delta is None
    assert not va.is_newer_version("latest", "1.0.0")


def test_deltas_absent_or_non_negative():
    assert va.major_version_delta("2.0.0", "1.0.0") == 0
    assert va.minor_version_delta("1.5.0", "1.2.0") == 0
    assert va.minor_version_delta("1.5.0", "2.0.0") is None
    assert va.major_version_delta("x", "1.0.0") is None


def test_up_to_date_is_not_outdated():
    result = va.analyze("1.10.0", DEMO)
    assert result.outdated is False
    assert result.next_minor_version is None
