# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Rate limit window types.

This module defines the fixed-window state owned by a service's rate
limiter and the result type of an admission check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .call import APICall


@dataclass
class RateLimitWindow:
    """
    Fixed (non-sliding) rate limit window for one service instance.

    Attributes:
        limit: Maximum calls admitted per window
        window_length: Window length in seconds
        window_start: Clock time at which the current window started
        counter: Calls admitted in the current window, always in [0, limit]
        rejected: Calls rejected in the current window (never re-queued)
        last_overflow: Number of calls rejected in the previous window
    """

    limit: int
    window_length: float
    window_start: float = 0.0
    counter: int = 0
    rejected: list[APICall] = field(default_factory=list, repr=False)
    last_overflow: int = 0

    @property
    def window_end(self) -> float:
        return self.window_start + self.window_length

    def is_expired(self, now: float) -> bool:
        return now >= self.window_end


@dataclass
class AdmissionResult:
    """
    Result of asking the rate limiter to admit a call.

    Attributes:
        admitted: Whether the call may be dispatched
        counter: Window counter after the check
        limit: Window limit
        retry_after: Seconds until the current window ends
    """

    admitted: bool
    counter: int
    limit: int
    retry_after: float = 0.0

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.counter)


__all__ = ["AdmissionResult", "RateLimitWindow"]
