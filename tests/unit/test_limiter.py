"""Unit tests for the fixed-window RateLimiter."""

from __future__ import annotations

import logging
import threading

import pytest
from prometheus_client import CollectorRegistry

from remote_api.limiter import RateLimiter
from remote_api.observability.collector import MetricsCollector
from remote_api.observability.constants import RATE_LIMIT_REJECTIONS_TOTAL
from remote_api.types import APICall, Endpoint, Request

LOGGER_NAME = "remote_api.tests.limiter"


def make_call(name: str = "list_items") -> APICall:
    return APICall(
        Endpoint(name, "GET", "/items"),
        Request(method="GET", url="https://x.example.com/items"),
    )


@pytest.fixture
def limiter(clock) -> RateLimiter:
    return RateLimiter(
        limit=2,
        window_length=10.0,
        clock=clock,
        name="ItemsAPI",
        log=logging.getLogger(LOGGER_NAME),
    )


def exhaust(limiter: RateLimiter, rejected: int) -> None:
    # The first admit rolls an expired window before the counter is read
    limiter.admit(make_call())
    while limiter.counter() < limiter.limit:
        limiter.admit(make_call())
    for _ in range(rejected):
        limiter.admit(make_call())


class TestAdmission:
    def test_admits_up_to_limit(self, limiter):
        first = limiter.admit(make_call())
        second = limiter.admit(make_call())

        assert first.admitted and second.admitted
        assert (first.counter, second.counter) == (1, 2)
        assert second.remaining == 0

    def test_rejects_over_limit_without_counting(self, limiter):
        exhaust(limiter, rejected=0)
        call = make_call("overflow")

        result = limiter.admit(call)

        assert not result.admitted
        assert result.counter == 2
        assert limiter.counter() == 2
        assert limiter.snapshot().rejected == [call]

    def test_retry_after_is_time_left_in_window(self, limiter, clock):
        exhaust(limiter, rejected=0)
        clock.advance(4.0)
        assert limiter.admit(make_call()).retry_after == pytest.approx(6.0)

    def test_new_window_after_window_length(self, limiter, clock):
        exhaust(limiter, rejected=1)
        clock.advance(10.0)

        result = limiter.admit(make_call())

        assert result.admitted
        assert limiter.counter() == 1
        assert limiter.last_overflow() == 1
        assert limiter.snapshot().rejected == []
        assert limiter.next_window_start() == pytest.approx(1020.0)

    def test_window_does_not_slide(self, limiter, clock):
        limiter.admit(make_call())
        clock.advance(9.0)
        limiter.admit(make_call())
        clock.advance(0.5)
        assert not limiter.admit(make_call()).admitted

    def test_reset(self, limiter, clock):
        exhaust(limiter, rejected=2)
        clock.advance(3.0)
        limiter.reset()

        snapshot = limiter.snapshot()
        assert snapshot.counter == 0
        assert snapshot.last_overflow == 0
        assert snapshot.window_start == 1003.0

    @pytest.mark.parametrize("limit,window", [(0, 10.0), (5, 0.0)])
    def test_invalid_arguments(self, limit, window):
        with pytest.raises(ValueError):
            RateLimiter(limit=limit, window_length=window)


class TestOverflowLogging:
    def test_no_log_without_overflow(self, limiter, clock, caplog):
        exhaust(limiter, rejected=0)
        clock.advance(10.0)
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            limiter.admit(make_call())
        assert caplog.records == []

    def test_first_overflow_is_a_warning(self, limiter, clock, caplog):
        exhaust(limiter, rejected=3)
        clock.advance(10.0)
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            limiter.admit(make_call())

        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert "rejected 3 calls" in caplog.text

    def test_growing_overflow_is_an_error(self, limiter, clock, caplog):
        exhaust(limiter, rejected=1)
        clock.advance(10.0)
        exhaust(limiter, rejected=4)
        clock.advance(10.0)
        caplog.clear()
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            limiter.admit(make_call())

        assert [r.levelno for r in caplog.records] == [logging.ERROR]
        assert "growing" in caplog.text
        assert limiter.last_overflow() == 4

    def test_shrinking_overflow_is_a_warning(self, limiter, clock, caplog):
        exhaust(limiter, rejected=4)
        clock.advance(10.0)
        exhaust(limiter, rejected=1)
        clock.advance(10.0)
        caplog.clear()
        with caplog.at_level(logging.WARNING, logger=LOGGER_NAME):
            limiter.admit(make_call())

        assert [r.levelno for r in caplog.records] == [logging.WARNING]


class TestConcurrency:
    def test_threads_never_exceed_limit(self):
        limiter = RateLimiter(limit=50, window_length=3600.0)
        results = []
        lock = threading.Lock()

        def worker():
            for _ in range(20):
                admitted = limiter.admit(make_call()).admitted
                with lock:
                    results.append(admitted)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 50
        assert limiter.counter() == 50
        assert len(limiter.snapshot().rejected) == 150


def test_rejections_are_counted_in_metrics(clock):
    metrics = MetricsCollector(registry=CollectorRegistry())
    limiter = RateLimiter(limit=1, window_length=5.0, clock=clock, name="ItemsAPI", metrics=metrics)

    limiter.admit(make_call())
    limiter.admit(make_call())
    limiter.admit(make_call())

    assert metrics.get_counter(RATE_LIMIT_REJECTIONS_TOTAL, {"service": "ItemsAPI"}) == 2
