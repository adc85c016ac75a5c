"""Refresh interval computation and scheduler tick behaviour."""
import logging
import threading

import pytest

from keycloak_api_manager.core.keycloak.scheduler import (
    DEFAULT_REFRESH_INTERVAL_MS,
    RefreshScheduler,
    compute_refresh_interval,
)


@pytest.mark.parametrize("lifespan,expected", [
    (60, 30000),
    ("300", 150000),
    (1.5, 750),
    (None, DEFAULT_REFRESH_INTERVAL_MS),
    ("not-a-number", DEFAULT_REFRESH_INTERVAL_MS),
    (0, DEFAULT_REFRESH_INTERVAL_MS),
    (-10, DEFAULT_REFRESH_INTERVAL_MS),
    (float("nan"), DEFAULT_REFRESH_INTERVAL_MS),
    (True, DEFAULT_REFRESH_INTERVAL_MS),
])
def test_compute_refresh_interval(lifespan, expected):
    assert compute_refresh_interval(lifespan) == expected


def test_tick_routes_errors_to_callback():
    errors = []

    def boom():
        raise RuntimeError("token endpoint down")

    scheduler = RefreshScheduler(boom, 1000, on_error=errors.append)
    scheduler.tick()
    scheduler.tick()

    assert [str(e) for e in errors] == ["token endpoint down", "token endpoint down"]


def test_tick_logs_by_default(caplog):
    def boom():
        raise RuntimeError("nope")

    scheduler = RefreshScheduler(boom, 1000)
    with caplog.at_level(logging.WARNING):
        scheduler.tick()

    assert "[refresh] Token refresh failed: nope" in caplog.text


def test_failing_error_callback_is_contained(caplog):
    def boom():
        raise RuntimeError("first")

    def bad_handler(exc):
        raise ValueError("second")

    scheduler = RefreshScheduler(boom, 1000, on_error=bad_handler)
    with caplog.at_level(logging.ERROR):
        scheduler.tick()

    assert "Error callback raised" in caplog.text


def test_thread_ticks_until_cancelled():
    ticked = threading.Event()
    scheduler = RefreshScheduler(ticked.set, 10)

    scheduler.start()
    try:
        assert scheduler.active
        assert ticked.wait(timeout=2)
    finally:
        scheduler.cancel()

    assert not scheduler.active
    scheduler._thread.join(timeout=2)
    assert not scheduler._thread.is_alive()
    assert scheduler._thread.daemon


def test_cancel_is_idempotent():
    scheduler = RefreshScheduler(lambda: None, 1000)

    scheduler.cancel()
    scheduler.cancel()
    scheduler.start()

    assert not scheduler.active
