import threading

import pytest

from driftwatch.core.scheduler import PeriodicRefresher


def test_runs_repeatedly_until_stopped():
    calls = threading.Semaphore(0)
    refresher = PeriodicRefresher(calls.release, interval_seconds=0.01)
    refresher.start()
    try:
        for _ in range(3):
            assert calls.acquire(timeout=5)
    finally:
        refresher.stop(timeout=5)
    assert not refresher.is_running
    assert refresher.run_count >= 3


def test_failing_task_does_not_stop_loop():
    calls = threading.Semaphore(0)

    def task():
        calls.release()
        raise RuntimeError("boom")

    refresher = PeriodicRefresher(task, interval_seconds=0.01)
    refresher.start()
    try:
        assert calls.acquire(timeout=5)
        assert calls.acquire(timeout=5)
    finally:
        refresher.stop(timeout=5)


def test_stop_before_first_run():
    ran = threading.Event()
    refresher = PeriodicRefresher(ran.set, interval_seconds=60)
    refresher.start()
    assert refresher.is_running
    refresher.stop(timeout=5)
    assert not refresher.is_running
    assert not ran.is_set()
    assert refresher.run_count == 0


def test_start_twice_keeps_one_thread():
    refresher = PeriodicRefresher(lambda: None, interval_seconds=60)
    refresher.start()
    first = refresher._thread
    refresher.start()
    assert refresher._thread is first
    refresher.stop(timeout=5)


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        PeriodicRefresher(lambda: None, interval_seconds=0)
