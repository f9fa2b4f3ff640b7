# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Service configuration for the remote API engine.

The overridable hooks on RemoteAPI (``rate_limit()``,
``rate_limit_window_length()``) read their defaults from this config, so
a deployment can tune limits without subclassing.
"""

from dataclasses import dataclass, field
from typing import Any

DRY_RUN_RESPONSE_DATA = {"message": "dry-run-response"}


@dataclass
class RemoteAPIConfig:
    """
    Configuration for one remote API service instance.

    This is a generic configuration that works with any provider.
    """

    # === Local Rate Limiting ===

    rate_limit: int = 450
    """Maximum calls admitted per rate limit window."""

    rate_limit_window_length: float = 20.0
    """Rate limit window length in seconds."""

    # === Transport ===

    request_timeout: float = 30.0
    """Timeout in seconds for the default httpx transport."""

    # === Diagnostics ===

    verbose: bool = False
    """Log every response at DEBUG and every provider error at ERROR."""

    dry_run: bool = False
    """Skip dispatch and answer every call with dry_run_response."""

    dry_run_response: dict[str, Any] = field(
        default_factory=lambda: dict(DRY_RUN_RESPONSE_DATA)
    )
    """Response data returned in dry-run mode."""

    # === Metrics and Monitoring ===

    metrics_enabled: bool = True
    """Enable metrics collection."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.rate_limit < 1:
            raise ValueError("rate_limit must be at least 1")
        if self.rate_limit_window_length <= 0:
            raise ValueError("rate_limit_window_length must be positive")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")


__all__ = ["DRY_RUN_RESPONSE_DATA", "RemoteAPIConfig"]
