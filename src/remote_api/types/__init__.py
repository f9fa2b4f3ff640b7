# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Type definitions and constants."""

from .auth import AccessTokenResponse, AuthStrategyType
from .call import APICall, CallParams, Request, Response
from .endpoint import (
    SUPPORTED_METHODS,
    DispatchFunc,
    Endpoint,
    HTTPMethod,
    NormalizationFunc,
    NormalizationMapping,
    NormalizationRule,
)
from .outcome import BUBBLE, Bubble, ErrorOutcome, Handled, Retry
from .rate_limit import AdmissionResult, RateLimitWindow

__all__ = [
    "BUBBLE",
    # Call state
    "APICall",
    # Auth
    "AccessTokenResponse",
    # Rate limiting
    "AdmissionResult",
    "AuthStrategyType",
    # Error outcomes
    "Bubble",
    "CallParams",
    "DispatchFunc",
    # Endpoints
    "Endpoint",
    "ErrorOutcome",
    "HTTPMethod",
    "Handled",
    "NormalizationFunc",
    "NormalizationMapping",
    "NormalizationRule",
    "RateLimitWindow",
    "Request",
    "Response",
    "Retry",
    "SUPPORTED_METHODS",
]
