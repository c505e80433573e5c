import pytest

from driftwatch.core.fetch_cache import FetchCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_get_returns_copy():
    cache = FetchCache()
    cache.put("a", ["1.0.0"])
    got = cache.get("a")
    got.append("2.0.0")
    assert cache.get("a") == ["1.0.0"]


def test_missing_key_is_none():
    assert FetchCache().get("nope") is None


def test_entries_expire():
    clock = FakeClock()
    cache = FetchCache(ttl_seconds=10, clock=clock)
    cache.put("a", ["1.0.0"])
    clock.now += 9
    assert cache.get("a") == ["1.0.0"]
    clock.now += 1
    assert cache.get("a") is None
    assert len(cache) == 0


def test_least_recently_used_is_evicted():
    cache = FetchCache(max_entries=2)
    cache.put("a", [])
    cache.put("b", [])
    cache.get("a")
    cache.put("c", [])
    assert cache.get("b") is None
    assert cache.get("a") == [] and cache.get("c") == []


def test_empty_result_is_cached():
    cache = FetchCache()
    cache.put("a", [])
    assert cache.get("a") == []


def test_clear():
    cache = FetchCache()
    cache.put("a", ["1.0.0"])
    cache.clear()
    assert len(cache) == 0


def test_rejects_zero_capacity():
    with pytest.raises(ValueError):
        FetchCache(max_entries=0)
