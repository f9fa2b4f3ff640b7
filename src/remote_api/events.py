# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Call lifecycle events.

Every call emits ``before`` once it is built, then either ``success`` or
``error``, then ``after``. Event names are
``"<ServiceName>.<endpoint_name>.<phase>"``.

EventEmitter is the in-process sink used when a service is not given one.
Listener failures are logged and never change the call's outcome.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .types.call import APICall, CallParams

logger = logging.getLogger(__name__)

WILDCARD = "*"

Listener = Callable[[str, "EndpointEvent"], None]


class EventPhase(str, Enum):
    """Lifecycle phase of a call."""

    BEFORE = "before"
    SUCCESS = "success"
    ERROR = "error"
    AFTER = "after"


@dataclass(frozen=True)
class EndpointEvent:
    """
    Payload of a lifecycle event.

    Attributes:
        params: The params the call was made with
        api_call: The current attempt; after a retry this is the retried call
        context: Caller-supplied context passed to ``call()``
        error: The error the call failed with, for ``error`` and failed ``after``
    """

    params: CallParams
    api_call: APICall
    context: Any = None
    error: BaseException | None = None


def event_name(service_name: str, endpoint_name: str, phase: EventPhase | str) -> str:
    value = phase.value if isinstance(phase, EventPhase) else phase
    return f"{service_name}.{endpoint_name}.{value}"


class EventEmitter:
    """
    Synchronous in-process event sink.

    Listeners subscribe to an exact event name or to ``"*"`` for every
    event, and are called with ``(event_name, payload)`` in subscription
    order.

    Example:
        >>> emitter = EventEmitter()
        >>> emitter.on("GmailAPI.send_message.error", alert)
        >>> service = GmailAPI(events=emitter)
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)
        self._lock = threading.Lock()

    def on(self, name: str, listener: Listener) -> None:
        """Subscribe a listener."""
        with self._lock:
            self._listeners[name].append(listener)

    def off(self, name: str, listener: Listener) -> None:
        """Unsubscribe a listener; unknown listeners are ignored."""
        with self._lock:
            listeners = self._listeners.get(name)
            if listeners and listener in listeners:
                listeners.remove(listener)

    def listener_count(self, name: str) -> int:
        with self._lock:
            return len(self._listeners.get(name, ()))

    def emit(self, event_name: str, payload: Any) -> None:
        with self._lock:
            listeners = [
                *self._listeners.get(event_name, ()),
                *self._listeners.get(WILDCARD, ()),
            ]

        for listener in listeners:
            try:
                listener(event_name, payload)
            except Exception:
                logger.exception(f"Listener for {event_name} raised")


__all__ = [
    "WILDCARD",
    "EndpointEvent",
    "EventEmitter",
    "EventPhase",
    "Listener",
    "event_name",
]
