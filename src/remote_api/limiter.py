# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Fixed-window local rate limiter.

Each service instance owns one RateLimiter guarding the provider quota
before anything goes on the wire. The window is fixed, not sliding: once
``window_length`` seconds have passed since the window started, the next
admission check opens a new window. Calls beyond the limit are rejected
and recorded; they are never queued or retried.

Concurrent calls on one service share the window, so the
read-check-increment sequence runs under a lock. The lock is a
``threading.Lock`` so the limiter stays correct when a service is shared
between event loops in different threads.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from .protocols.clock import ClockProtocol, MonotonicClock
from .types.rate_limit import AdmissionResult, RateLimitWindow

if TYPE_CHECKING:
    from .observability.collector import MetricsCollector
    from .types.call import APICall

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Fixed-window admission control for one service.

    Args:
        limit: Maximum calls admitted per window
        window_length: Window length in seconds
        clock: Time source; MonotonicClock by default
        name: Service name used in log messages and metric labels
        metrics: Optional collector recording rejections
        log: Logger receiving overflow warnings; the module logger by default

    Example:
        >>> limiter = RateLimiter(limit=450, window_length=20.0, name="GmailAPI")
        >>> result = limiter.admit(api_call)
        >>> result.admitted
        True
    """

    def __init__(
        self,
        limit: int,
        window_length: float,
        clock: ClockProtocol | None = None,
        name: str = "RemoteAPI",
        metrics: MetricsCollector | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        if limit < 1:
            raise ValueError(f"rate limit must be >= 1, got {limit}")
        if window_length <= 0:
            raise ValueError(f"window length must be > 0, got {window_length}")

        self.name = name
        self._clock = clock or MonotonicClock()
        self._metrics = metrics
        self._logger = log or logger
        self._window = RateLimitWindow(
            limit=limit,
            window_length=window_length,
            window_start=self._clock.now(),
        )
        self._lock = threading.Lock()

    @property
    def limit(self) -> int:
        return self._window.limit

    @property
    def window_length(self) -> float:
        return self._window.window_length

    def admit(self, api_call: APICall) -> AdmissionResult:
        """
        Admit or reject one call against the current window.

        A rejected call is appended to the window's rejected list. The
        caller turns a rejection into LocalRateLimitExceededError.
        """
        with self._lock:
            now = self._clock.now()
            window = self._window
            if window.is_expired(now):
                self._roll_window(now)

            retry_after = max(0.0, window.window_end - now)
            if window.counter >= window.limit:
                window.rejected.append(api_call)
                admitted = False
            else:
                window.counter += 1
                admitted = True
            result = AdmissionResult(
                admitted=admitted,
                counter=window.counter,
                limit=window.limit,
                retry_after=retry_after,
            )

        if not admitted and self._metrics is not None:
            self._metrics.record_rejection(self.name)
        return result

    def _roll_window(self, now: float) -> None:
        # Caller holds self._lock
        window = self._window
        overflow = len(window.rejected)
        if overflow > 0:
            if window.last_overflow and overflow > window.last_overflow:
                self._logger.error(
                    f"{self.name} rate limit overflow is growing: {overflow} calls "
                    f"rejected in the last window (previous window: "
                    f"{window.last_overflow}). Consider lowering the call volume "
                    f"or raising rate_limit()."
                )
            else:
                self._logger.warning(
                    f"{self.name} rejected {overflow} calls in the last rate limit "
                    f"window (limit {window.limit} per {window.window_length}s)"
                )
        window.last_overflow = overflow
        window.window_start = now
        window.counter = 0
        window.rejected.clear()

    def next_window_start(self) -> float:
        """Clock time at which the current window ends."""
        with self._lock:
            return self._window.window_end

    def counter(self) -> int:
        with self._lock:
            return self._window.counter

    def last_overflow(self) -> int:
        """Number of calls rejected in the previous window."""
        with self._lock:
            return self._window.last_overflow

    def snapshot(self) -> RateLimitWindow:
        """Copy of the window state; the rejected list is copied too."""
        with self._lock:
            window = self._window
            return RateLimitWindow(
                limit=window.limit,
                window_length=window.window_length,
                window_start=window.window_start,
                counter=window.counter,
                rejected=list(window.rejected),
                last_overflow=window.last_overflow,
            )

    def reset(self) -> None:
        """Start a fresh window now and forget past overflow."""
        with self._lock:
            self._window.window_start = self._clock.now()
            self._window.counter = 0
            self._window.rejected.clear()
            self._window.last_overflow = 0


__all__ = ["RateLimiter"]
