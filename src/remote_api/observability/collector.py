# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Call metrics, kept in memory and mirrored into prometheus_client.

The pipeline and the rate limiter report through the ``record_*`` methods.
Each update lands in a plain in-memory series (read back with
``get_metrics()`` or ``get_counter()``) and, when Prometheus is enabled,
in a Counter or Histogram registered on the collector's registry.

Usage:
    >>> collector = get_metrics_collector()
    >>> collector.record_call("GitHubAPI", "get_user", "success", 0.21)
    >>> collector.get_metrics()["counters"]["remote_api_calls_total"]
    {'endpoint=get_user,outcome=success,service=GitHubAPI': 1}

Thread Safety:
    Updates and snapshots take one reentrant lock, so services called from
    several threads can share a collector.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram
from prometheus_client import start_http_server as prometheus_start_http_server

from .constants import (
    AUTH_RETRIES_TOTAL,
    CALL_DURATION_SECONDS,
    CALLS_TOTAL,
    LATENCY_BUCKETS,
    RATE_LIMIT_REJECTIONS_TOTAL,
    TRANSPORT_ERRORS_TOTAL,
)

logger = logging.getLogger(__name__)

PrometheusMetric = Union[Counter, Histogram]

# Observations kept per histogram series for the in-memory snapshot
MAX_OBSERVATIONS = 5000


@dataclass(frozen=True)
class MetricDefinition:
    """Name, kind, help text and label names of one engine metric."""

    name: str
    metric_type: str  # 'counter' or 'histogram'
    description: str
    label_names: tuple[str, ...] = ()
    buckets: tuple[float, ...] | None = None


METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    d.name: d
    for d in (
        MetricDefinition(
            CALLS_TOTAL,
            "counter",
            "Total remote API calls finished",
            ("service", "endpoint", "outcome"),
        ),
        MetricDefinition(
            AUTH_RETRIES_TOTAL,
            "counter",
            "Total calls retried after an auth retry signal",
            ("service", "endpoint"),
        ),
        MetricDefinition(
            TRANSPORT_ERRORS_TOTAL,
            "counter",
            "Total provider errors returned by the transport",
            ("service", "endpoint", "status"),
        ),
        MetricDefinition(
            RATE_LIMIT_REJECTIONS_TOTAL,
            "counter",
            "Total calls rejected by the local rate limit window",
            ("service",),
        ),
        MetricDefinition(
            CALL_DURATION_SECONDS,
            "histogram",
            "Remote API call duration",
            ("service", "endpoint"),
            buckets=tuple(LATENCY_BUCKETS),
        ),
    )
}


def series_key(labels: dict[str, str] | None) -> str:
    """Stable ``k=v,k=v`` key for a label set, sorted by label name."""
    if not labels:
        return ""
    return ",".join(f"{name}={value}" for name, value in sorted(labels.items()))


class MetricsCollector:
    """
    Records call outcomes, durations, retries, provider errors and
    local rate limit rejections.

    Args:
        enable_prometheus: Mirror updates into prometheus_client metrics
        registry: Registry the Prometheus metrics are created on; the
            process-wide default registry if None. Tests pass a fresh
            CollectorRegistry so collectors never clash.

    Each metric tracks at most MAX_LABEL_COMBINATIONS label sets; updates
    for further label sets are dropped with a warning.
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: CollectorRegistry | None = None,
    ) -> None:
        self._enable_prometheus = enable_prometheus
        self._registry = registry if registry is not None else REGISTRY
        self._lock = threading.RLock()

        self._counters: dict[str, dict[str, int]] = defaultdict(dict)
        self._observations: dict[str, dict[str, list[float]]] = defaultdict(dict)
        self._series: dict[str, set[str]] = defaultdict(set)

        # None marks a metric Prometheus refused, so creation is not retried
        self._prometheus: dict[str, PrometheusMetric | None] = {}
        self._server_running = False

    # === Engine events ===

    def record_call(
        self, service: str, endpoint: str, outcome: str, duration: float
    ) -> None:
        """A call finished with ``outcome`` (success, handled or error)."""
        self.inc_counter(
            CALLS_TOTAL,
            labels={"service": service, "endpoint": endpoint, "outcome": outcome},
        )
        self.observe_histogram(
            CALL_DURATION_SECONDS,
            duration,
            labels={"service": service, "endpoint": endpoint},
        )

    def record_auth_retry(self, service: str, endpoint: str) -> None:
        self.inc_counter(
            AUTH_RETRIES_TOTAL, labels={"service": service, "endpoint": endpoint}
        )

    def record_transport_error(
        self, service: str, endpoint: str, status: int | None
    ) -> None:
        self.inc_counter(
            TRANSPORT_ERRORS_TOTAL,
            labels={
                "service": service,
                "endpoint": endpoint,
                "status": "none" if status is None else str(status),
            },
        )

    def record_rejection(self, service: str) -> None:
        self.inc_counter(RATE_LIMIT_REJECTIONS_TOTAL, labels={"service": service})

    # === Generic updates ===

    def inc_counter(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Add ``value`` to a counter series.

        Names without a definition in METRIC_DEFINITIONS are kept in memory
        only.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        key = series_key(labels)
        with self._lock:
            if not self._admit_series(name, key):
                return
            series = self._counters[name]
            series[key] = series.get(key, 0) + value

        metric = self._prometheus_metric(name, "counter")
        if metric is not None:
            (metric.labels(**labels) if labels else metric).inc(value)

    def observe_histogram(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        key = series_key(labels)
        with self._lock:
            if not self._admit_series(name, key):
                return
            observations = self._observations[name].setdefault(key, [])
            observations.append(value)
            if len(observations) > 2 * MAX_OBSERVATIONS:
                del observations[:-MAX_OBSERVATIONS]

        metric = self._prometheus_metric(name, "histogram")
        if metric is not None:
            (metric.labels(**labels) if labels else metric).observe(value)

    def _admit_series(self, name: str, key: str) -> bool:
        known = self._series[name]
        if key in known:
            return True
        if len(known) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                f"Metric {name} already has {self.MAX_LABEL_COMBINATIONS} label "
                f"sets; dropping update for {key}"
            )
            return False
        known.add(key)
        return True

    def _prometheus_metric(self, name: str, kind: str) -> PrometheusMetric | None:
        if not self._enable_prometheus:
            return None

        with self._lock:
            if name in self._prometheus:
                return self._prometheus[name]

            definition = METRIC_DEFINITIONS.get(name)
            metric: PrometheusMetric | None = None
            if definition is None or definition.metric_type != kind:
                logger.debug(f"{name} has no {kind} definition; kept in memory only")
            else:
                try:
                    if kind == "counter":
                        metric = Counter(
                            name,
                            definition.description,
                            definition.label_names,
                            registry=self._registry,
                        )
                    else:
                        metric = Histogram(
                            name,
                            definition.description,
                            definition.label_names,
                            buckets=definition.buckets or tuple(LATENCY_BUCKETS),
                            registry=self._registry,
                        )
                except ValueError as e:
                    # Another collector already registered this name
                    logger.warning(f"Prometheus {kind} {name} not created: {e}")

            self._prometheus[name] = metric
            return metric

    # === Reading ===

    def get_metrics(self) -> dict[str, Any]:
        """
        JSON-friendly snapshot of the in-memory series.

        Returns:
            ``{"counters": {name: {series_key: value}},
            "histograms": {name: {series_key: {count, sum, avg, min, max}}}}``
        """
        with self._lock:
            counters = {name: dict(series) for name, series in self._counters.items()}
            histograms = {
                name: {
                    key: _summarize(values)
                    for key, values in series.items()
                    if values
                }
                for name, series in self._observations.items()
            }
        return {"counters": counters, "histograms": histograms}

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        """In-memory value of one counter series; 0 if never incremented."""
        with self._lock:
            return self._counters.get(name, {}).get(series_key(labels), 0)

    def reset(self) -> None:
        """Forget the in-memory series. Prometheus metrics are left as they are."""
        with self._lock:
            self._counters.clear()
            self._observations.clear()
            self._series.clear()

    # === Scrape endpoint ===

    def start_http_server(self, host: str = "127.0.0.1", port: int = 9090) -> bool:
        """
        Serve the collector's registry for Prometheus scraping.

        Returns:
            True once the server is running, False if binding failed
        """
        if self._server_running:
            logger.warning("Prometheus server already running")
            return True

        try:
            prometheus_start_http_server(port, addr=host, registry=self._registry)
        except OSError as e:
            logger.error(f"Could not start Prometheus server on {host}:{port}: {e}")
            return False

        self._server_running = True
        logger.info(f"Serving remote API metrics on http://{host}:{port}/metrics")
        return True

    @property
    def prometheus_enabled(self) -> bool:
        return self._enable_prometheus

    @property
    def server_running(self) -> bool:
        return self._server_running


def _summarize(values: list[float]) -> dict[str, float]:
    total = sum(values)
    return {
        "count": len(values),
        "sum": total,
        "avg": total / len(values),
        "min": min(values),
        "max": max(values),
    }


# === Shared collector ===

_shared_collector: MetricsCollector | None = None
_shared_lock = threading.Lock()


def get_metrics_collector(enable_prometheus: bool = True) -> MetricsCollector:
    """
    Collector shared by every service that is not given one.

    Sharing keeps each Prometheus metric registered once per process.
    ``enable_prometheus`` only matters on the first call.
    """
    global _shared_collector

    if _shared_collector is None:
        with _shared_lock:
            if _shared_collector is None:
                _shared_collector = MetricsCollector(
                    enable_prometheus=enable_prometheus
                )
    return _shared_collector


def reset_metrics_collector() -> None:
    """
    Drop the shared collector, mainly for tests.

    Metrics it registered on the default registry stay registered; the
    next shared collector keeps those names in memory only.
    """
    global _shared_collector
    with _shared_lock:
        if _shared_collector is not None:
            _shared_collector.reset()
        _shared_collector = None


__all__ = [
    "METRIC_DEFINITIONS",
    "MetricDefinition",
    "MetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
    "series_key",
]
