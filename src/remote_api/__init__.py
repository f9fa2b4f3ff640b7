# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Remote API - Declarative engine for calling third-party HTTP APIs.

Provider adapters describe endpoints as data and call them through one
asynchronous pipeline that handles authentication, local rate limiting,
a single retry on token refresh, response normalization and lifecycle
events.

Key Features:
    - Endpoint tables collected along the class hierarchy
    - Pluggable auth strategies (bearer, custom header, refreshable bearer)
    - Fixed-window local rate limiting before anything is sent
    - Tagged error outcomes (Bubble, Handled, Retry) instead of retry exceptions
    - Mapping or function based response normalization
    - Prometheus metrics and stdlib logging

Quick Start:
    >>> from remote_api import Endpoint, HTTPMethod, RemoteAPI
    >>>
    >>> class StatusAPI(RemoteAPI):
    ...     endpoints = (
    ...         Endpoint("get_status", HTTPMethod.GET, "/status/:component",
    ...                  normalize={"state": "status.indicator"}),
    ...     )
    ...     def base_url(self) -> str:
    ...         return "https://status.example.com/api"
    >>>
    >>> async with StatusAPI() as api:
    ...     response = await api.call(
    ...         "get_status", {"path_params": {"component": "db"}}
    ...     )

Version: 1.0.0
"""

__version__ = "1.0.0"

from .auth import (
    AuthRegistry,
    AuthStrategy,
    BearerTokenAuthStrategy,
    CustomHeaderTokenAuthStrategy,
    NoneAuthStrategy,
    RefreshableBearerTokenAuthStrategy,
)
from .config import RemoteAPIConfig
from .endpoints import EndpointRegistry, URLResolver
from .events import EndpointEvent, EventEmitter, EventPhase
from .exceptions import (
    AuthenticationFailedError,
    AuthStrategyNotConfiguredError,
    ConfigurationError,
    EndpointNotFoundError,
    InvalidAuthParamsError,
    InvalidMethodError,
    LocalRateLimitExceededError,
    MissingPathParameterError,
    RemoteAPIError,
    RequestConstructionError,
    TransportError,
)
from .humanize import HumanizedError
from .limiter import RateLimiter
from .normalizer import ResponseNormalizer
from .observability import MetricsCollector, get_metrics_collector
from .pipeline import CallPipeline
from .protocols import (
    ClockProtocol,
    EventSinkProtocol,
    MonotonicClock,
    TransportProtocol,
)
from .service import RemoteAPI
from .transport import HTTPXTransport
from .types import (
    AccessTokenResponse,
    APICall,
    AuthStrategyType,
    Bubble,
    CallParams,
    Endpoint,
    ErrorOutcome,
    Handled,
    HTTPMethod,
    Request,
    Response,
    Retry,
)

__all__ = [
    "APICall",
    "AccessTokenResponse",
    "AuthRegistry",
    "AuthStrategy",
    "AuthStrategyNotConfiguredError",
    "AuthStrategyType",
    "AuthenticationFailedError",
    "BearerTokenAuthStrategy",
    "Bubble",
    "CallParams",
    "CallPipeline",
    "ClockProtocol",
    "ConfigurationError",
    "CustomHeaderTokenAuthStrategy",
    "Endpoint",
    "EndpointEvent",
    "EndpointNotFoundError",
    "EndpointRegistry",
    "ErrorOutcome",
    "EventEmitter",
    "EventPhase",
    "EventSinkProtocol",
    "HTTPMethod",
    "HTTPXTransport",
    "Handled",
    "HumanizedError",
    "InvalidAuthParamsError",
    "InvalidMethodError",
    "LocalRateLimitExceededError",
    "MetricsCollector",
    "MissingPathParameterError",
    "MonotonicClock",
    "NoneAuthStrategy",
    "RateLimiter",
    "RefreshableBearerTokenAuthStrategy",
    "RemoteAPI",
    "RemoteAPIConfig",
    "RemoteAPIError",
    "Request",
    "RequestConstructionError",
    "Response",
    "ResponseNormalizer",
    "Retry",
    "TransportError",
    "TransportProtocol",
    "URLResolver",
    "__version__",
    "get_metrics_collector",
]
