# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for the engine's collaborators.

This module provides Protocol classes that define the interfaces for
pluggable components of the call pipeline.

Available protocols:
- TransportProtocol: Sends a request and returns a Response
- EventSinkProtocol: Receives call lifecycle events
- ClockProtocol: Time source for the rate limiter
"""

from .clock import ClockProtocol, MonotonicClock
from .events import EventSinkProtocol
from .transport import TransportProtocol

__all__ = [
    "ClockProtocol",
    "EventSinkProtocol",
    "MonotonicClock",
    "TransportProtocol",
]
