"""Shared fixtures: a controllable clock, a scripted transport and a recording event sink."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

import pytest
from prometheus_client import CollectorRegistry

from remote_api.config import RemoteAPIConfig
from remote_api.observability.collector import MetricsCollector
from remote_api.types.call import Response


class FakeClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self, start: float = 1000.0) -> None:
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


@dataclass
class SentRequest:
    method: str
    url: str
    headers: dict[str, str]
    query: dict[str, Any] | None
    body: Any


@dataclass
class FakeTransport:
    """
    Transport that records requests and replays queued results.

    Queued exceptions are raised, queued Responses returned. With nothing
    queued it answers 200 with an empty dict.
    """

    requests: list[SentRequest] = field(default_factory=list)
    results: deque = field(default_factory=deque)

    def queue(self, *results: Any) -> None:
        self.results.extend(results)

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        query: dict[str, Any] | None,
        body: Any,
    ) -> Response:
        self.requests.append(SentRequest(method, url, dict(headers), query, body))
        result = self.results.popleft() if self.results else Response(data={})
        if isinstance(result, BaseException):
            raise result
        return result


class RecordingSink:
    """Event sink keeping (name, payload) pairs in emission order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    def emit(self, event_name: str, payload: Any) -> None:
        self.events.append((event_name, payload))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def phases(self) -> list[str]:
        return [name.rsplit(".", 1)[1] for name in self.names]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def metrics() -> MetricsCollector:
    """Collector on a private registry so tests never collide on metric names."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def config() -> RemoteAPIConfig:
    return RemoteAPIConfig(rate_limit=3, rate_limit_window_length=20.0)
