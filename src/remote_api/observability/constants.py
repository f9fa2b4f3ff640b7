# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the `remote_api_` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`

Label Best Practices:
    To prevent label cardinality explosion, use only:
    - `service` - Service class name (GmailAPI, GitHubAPI)
    - `endpoint` - Endpoint name as declared on the service
    - `outcome` - Call outcome (enum: success, handled, error)
    - `status` - HTTP status code as string, "none" when absent

    NEVER use:
    - URLs or path parameters (unbounded!)
    - user or account identifiers (unbounded!)

Usage:
    >>> from remote_api.observability.constants import CALLS_TOTAL
    >>> print(CALLS_TOTAL)
    'remote_api_calls_total'
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "remote_api"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Call Metrics (pipeline.py)
# =============================================================================

CALLS_TOTAL = f"{METRIC_PREFIX}_calls_total"
"""Total calls that finished, by outcome."""

CALL_DURATION_SECONDS = f"{METRIC_PREFIX}_call_duration_seconds"
"""Wall time of a call from admission to completion, retries included."""

AUTH_RETRIES_TOTAL = f"{METRIC_PREFIX}_auth_retries_total"
"""Total calls dispatched a second time after an auth retry signal."""

TRANSPORT_ERRORS_TOTAL = f"{METRIC_PREFIX}_transport_errors_total"
"""Total provider errors seen by the pipeline, before classification."""


# =============================================================================
# Rate Limit Metrics (limiter.py)
# =============================================================================

RATE_LIMIT_REJECTIONS_TOTAL = f"{METRIC_PREFIX}_rate_limit_rejections_total"
"""Total calls rejected by the local rate limit window."""


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS = [0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
"""Buckets for remote call durations, in seconds."""


__all__ = [
    "AUTH_RETRIES_TOTAL",
    "CALLS_TOTAL",
    "CALL_DURATION_SECONDS",
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "RATE_LIMIT_REJECTIONS_TOTAL",
    "TRANSPORT_ERRORS_TOTAL",
]
