# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the remote API engine.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from RemoteAPIError, making it easy to catch
every engine-related failure with a single except clause.

Request-construction errors (missing path parameters, invalid methods,
invalid credentials) are raised before anything reaches the transport.
Provider errors arrive as TransportError and are routed through the auth
strategy and service hooks before they propagate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .types.auth import strategy_type_name

if TYPE_CHECKING:
    from .auth.base import AuthStrategy
    from .types.call import APICall, CallParams, Response


class RemoteAPIError(Exception):
    """Base exception for all remote API engine errors.

    Example:
        try:
            await service.call("get_profile", params)
        except RemoteAPIError as e:
            logger.error(f"Remote API error: {e}")
    """

    pass


class ConfigurationError(RemoteAPIError):
    """Raised when a service or its configuration is invalid.

    Common causes include:
    - Two endpoints with the same name declared in one table
    - Endpoint descriptors with an empty name or URL
    - A service without a base URL calling a relative endpoint
    """

    pass


class EndpointNotFoundError(RemoteAPIError):
    """Raised when a call names an endpoint the service does not declare.

    Attributes:
        service_name: Name of the service that was called.
        endpoint_name: The endpoint name that could not be resolved.
    """

    def __init__(self, service_name: str, endpoint_name: str):
        super().__init__(f"Endpoint {service_name}.{endpoint_name} not found")
        self.service_name = service_name
        self.endpoint_name = endpoint_name


class AuthStrategyNotConfiguredError(RemoteAPIError):
    """Raised when an endpoint requires an auth strategy the service lacks.

    Detected at construction time for declared endpoint strategies and at
    call time for the service default.

    Attributes:
        strategy_type: The auth strategy type that has no instance.
        endpoint_name: The endpoint requiring it, when known.
    """

    def __init__(
        self,
        strategy_type: Any,
        service_name: str,
        endpoint_name: str | None = None,
    ):
        target = f"{service_name}.{endpoint_name}" if endpoint_name else service_name
        super().__init__(
            f"Authentication strategy {strategy_type_name(strategy_type)} "
            f"not configured for {target}. "
            "Return an instance of it from use_auth_strategies()."
        )
        self.strategy_type = strategy_type
        self.service_name = service_name
        self.endpoint_name = endpoint_name


class RequestConstructionError(RemoteAPIError):
    """Base class for errors raised while building a request.

    These errors are local and fatal: the call never reaches the rate
    limiter, the transport or any error hook.
    """

    pass


class MissingPathParameterError(RequestConstructionError):
    """Raised when a URL template placeholder has no value.

    Attributes:
        url: The URL template being resolved.
        missing: Names of every placeholder without a value.

    Example:
        >>> resolver.resolve("/users/:user_id", {})
        Traceback (most recent call last):
        ...
        MissingPathParameterError: Missing path parameter(s) for URL '/users/:user_id': [user_id]
    """

    def __init__(self, url: str, missing: list[str]):
        super().__init__(
            f"Missing path parameter(s) for URL '{url}': [{', '.join(missing)}]"
        )
        self.url = url
        self.missing = missing


class InvalidMethodError(RequestConstructionError):
    """Raised when an API call uses an unsupported HTTP verb."""

    def __init__(self, method: str):
        super().__init__(f"Method {method} is not a valid HTTP method")
        self.method = method


class InvalidAuthParamsError(RemoteAPIError):
    """Raised when credentials required by an auth strategy are missing.

    Attributes:
        auth_strategy: The strategy that rejected the credentials.
        api_call: The call being built.
    """

    def __init__(
        self,
        auth_strategy: AuthStrategy,
        api_call: APICall,
        message: str = "Auth parameters provided with API call are invalid.",
    ):
        super().__init__(message)
        self.auth_strategy = auth_strategy
        self.api_call = api_call


class LocalRateLimitExceededError(RemoteAPIError):
    """Raised when the service's local rate limit window is exhausted.

    This differs from a provider answering with HTTP 429: the call is
    rejected by the local limiter before anything is sent. Rejected calls
    are never queued; callers decide whether and when to call again.

    Attributes:
        service_name: Name of the service whose window is full.
        api_call: The rejected call.
        retry_after: Seconds until the current window ends, if known.

    Example:
        try:
            await service.call("send_message", params)
        except LocalRateLimitExceededError as e:
            await asyncio.sleep(e.retry_after or 1.0)
    """

    def __init__(
        self,
        service_name: str,
        api_call: APICall,
        retry_after: float | None = None,
    ):
        super().__init__(
            f"Local remote API rate limit exceeded when calling "
            f"{service_name}.{api_call.endpoint.name}"
        )
        self.service_name = service_name
        self.api_call = api_call
        self.retry_after = retry_after


class TransportError(RemoteAPIError):
    """Raised by a transport when the provider answers with a non-success status.

    Attributes:
        status: HTTP status code, or None for failures without a response.
        headers: Response headers.
        data: Parsed response body (JSON when possible, otherwise text).
        response: The Response built from the failed exchange, if any.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        headers: dict[str, str] | None = None,
        data: Any = None,
        response: Response | None = None,
    ):
        super().__init__(message)
        self.status = status
        self.headers = headers or {}
        self.data = data
        self.response = response


class AuthenticationFailedError(RemoteAPIError):
    """Raised when authentication is terminally rejected.

    Raised by the default on_auth_error handler, and by the pipeline when a
    retried call asks to be retried a second time.

    Attributes:
        auth_strategy: Strategy in use when authentication failed.
        params: The call parameters.
        api_call: The call that failed.
        error: The underlying provider error, if any.
    """

    def __init__(
        self,
        auth_strategy: AuthStrategy | None,
        params: CallParams | None,
        api_call: APICall | None,
        error: BaseException | None = None,
        message: str = "Authentication failed",
    ):
        super().__init__(message)
        self.auth_strategy = auth_strategy
        self.params = params
        self.api_call = api_call
        self.error = error


__all__ = [
    "AuthStrategyNotConfiguredError",
    "AuthenticationFailedError",
    "ConfigurationError",
    "EndpointNotFoundError",
    "InvalidAuthParamsError",
    "InvalidMethodError",
    "LocalRateLimitExceededError",
    "MissingPathParameterError",
    "RemoteAPIError",
    "RequestConstructionError",
    "TransportError",
]
