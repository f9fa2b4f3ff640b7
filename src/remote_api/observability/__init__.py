# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for the remote API engine.

Classes:
    MetricsCollector: Call metrics kept in memory and mirrored into prometheus_client.

Functions:
    get_metrics_collector: Get the global metrics collector singleton.
    reset_metrics_collector: Reset the global metrics collector singleton.

Constants:
    All metric name constants from the constants module.
"""

from .collector import (
    METRIC_DEFINITIONS,
    MetricDefinition,
    MetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
    series_key,
)
from .constants import (
    AUTH_RETRIES_TOTAL,
    CALL_DURATION_SECONDS,
    CALLS_TOTAL,
    LATENCY_BUCKETS,
    METRIC_PREFIX,
    RATE_LIMIT_REJECTIONS_TOTAL,
    TRANSPORT_ERRORS_TOTAL,
)

__all__ = [
    "AUTH_RETRIES_TOTAL",
    "CALLS_TOTAL",
    "CALL_DURATION_SECONDS",
    "LATENCY_BUCKETS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "RATE_LIMIT_REJECTIONS_TOTAL",
    "TRANSPORT_ERRORS_TOTAL",
    "MetricDefinition",
    "MetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
    "series_key",
]
