# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for lifecycle event sinks."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EventSinkProtocol(Protocol):
    """
    Receives call lifecycle events.

    Event names follow ``"<ServiceName>.<endpoint_name>.<phase>"`` where the
    phase is one of before, success, error, after. The payload is an
    EndpointEvent carrying the params, the APICall and the caller context.
    """

    def emit(self, event_name: str, payload: Any) -> None:
        """Deliver one event."""
        ...
