# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base class for provider adapters.

A provider adapter subclasses RemoteAPI, declares its endpoints as data,
supplies its auth strategies and overrides whichever hooks it needs:

    class GitHubAPI(RemoteAPI):
        endpoints = (
            Endpoint("get_user", HTTPMethod.GET, "/users/:username"),
            Endpoint(
                "create_issue",
                HTTPMethod.POST,
                "/repos/:owner/:repo/issues",
                auth=AuthStrategyType.BEARER_TOKEN,
                normalize={"number": "number", "url": "html_url"},
            ),
        )

        def base_url(self) -> str:
            return "https://api.github.com"

        def use_auth_strategies(self):
            return [BearerTokenAuthStrategy()]

    github = GitHubAPI()
    response = await github.call(
        "create_issue",
        {
            "path_params": {"owner": "octo", "repo": "demo"},
            "payload": {"title": "Bug"},
            "auth": {"access_token": token},
        },
    )

Endpoint tables on mixins and base classes are collected along the MRO,
so capabilities shared by several providers can live in a mixin.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from .auth.base import AuthStrategy
from .auth.registry import AuthRegistry
from .config import RemoteAPIConfig
from .endpoints.registry import EndpointRegistry
from .events import EventEmitter
from .exceptions import TransportError
from .humanize import HumanizedError, default_humanize_error
from .limiter import RateLimiter
from .observability.collector import MetricsCollector, get_metrics_collector
from .pipeline import CallPipeline
from .transport import HTTPXTransport
from .types.auth import AuthStrategyType
from .types.outcome import Bubble, ErrorOutcome

if TYPE_CHECKING:
    from .protocols.clock import ClockProtocol
    from .protocols.events import EventSinkProtocol
    from .protocols.transport import TransportProtocol
    from .types.call import APICall, CallParams, Response
    from .types.endpoint import Endpoint


class RemoteAPI:
    """
    Declarative remote API service.

    Args:
        transport: Does the HTTP exchange; an HTTPXTransport by default
        events: Receives lifecycle events; an EventEmitter by default
        config: Service configuration
        clock: Time source for the rate limiter
        metrics: Metrics collector; the shared collector when metrics are
            enabled and none is given
        logger: Logger; ``remote_api.<ServiceName>`` by default
        endpoints: Extra endpoints for this instance, overriding declared ones
    """

    endpoints: ClassVar[Sequence[Endpoint]] = ()

    def __init__(
        self,
        transport: TransportProtocol | None = None,
        events: EventSinkProtocol | None = None,
        config: RemoteAPIConfig | None = None,
        clock: ClockProtocol | None = None,
        metrics: MetricsCollector | None = None,
        logger: logging.Logger | None = None,
        endpoints: Iterable[Endpoint] = (),
    ) -> None:
        self._config = config or RemoteAPIConfig()
        self._logger = logger or logging.getLogger(f"remote_api.{self.name}")
        self._metrics = (
            (metrics or get_metrics_collector()) if self._config.metrics_enabled else None
        )
        self._owns_transport = transport is None
        self._transport = transport or HTTPXTransport(
            timeout=self._config.request_timeout
        )
        self._events = events if events is not None else EventEmitter()

        self._auth = AuthRegistry(self.use_auth_strategies(), self.name)
        self._endpoint_registry = EndpointRegistry.from_service(
            type(self),
            extra=endpoints,
            strategies=self._auth,
            service_name=self.name,
        )
        self._limiter = RateLimiter(
            limit=self.rate_limit(),
            window_length=self.rate_limit_window_length(),
            clock=clock,
            name=self.name,
            metrics=self._metrics,
            log=self._logger,
        )
        self._pipeline = CallPipeline(
            self,
            endpoints=self._endpoint_registry,
            auth=self._auth,
            limiter=self._limiter,
            transport=self._transport,
            events=self._events,
            config=self._config,
            metrics=self._metrics,
            log=self._logger,
        )

    # === Exposed state ===

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def config(self) -> RemoteAPIConfig:
        return self._config

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    @property
    def transport(self) -> TransportProtocol:
        return self._transport

    @property
    def events(self) -> EventSinkProtocol:
        return self._events

    @property
    def metrics(self) -> MetricsCollector | None:
        return self._metrics

    @property
    def endpoint_registry(self) -> EndpointRegistry:
        return self._endpoint_registry

    @property
    def rate_limiter(self) -> RateLimiter:
        return self._limiter

    # === Calling ===

    async def call(
        self,
        name: str,
        params: CallParams | Mapping[str, Any] | None = None,
        context: Any = None,
        overwrite_url: str | None = None,
    ) -> Response | None:
        """
        Call an endpoint by name.

        Args:
            name: Endpoint name
            params: CallParams or a mapping with the same keys
            context: Passed to event listeners; defaults to ``params.context``
            overwrite_url: Use this URL verbatim instead of resolving the template

        Returns:
            The (normalized) Response, or None when an error hook handled
            the error without a substitute response
        """
        return await self._pipeline.call(name, params, context, overwrite_url)

    def build_api_call(
        self,
        endpoint: Endpoint,
        params: CallParams | Mapping[str, Any] | None,
        auth_strategy: AuthStrategy,
        overwrite_url: str | None = None,
    ) -> APICall:
        """Build an APICall for an endpoint; used by strategies that rebuild calls."""
        return self._pipeline.build_api_call(
            endpoint, params, auth_strategy, overwrite_url
        )

    def auth_strategy(self, strategy_type: AuthStrategyType | str) -> AuthStrategy:
        """The strategy instance registered for a type."""
        return self._auth.get(strategy_type)

    # === Hooks ===

    def base_url(self) -> str | None:
        """Prefix for relative endpoint URLs. Services with relative URLs override it."""
        return None

    def default_auth_strategy(self) -> AuthStrategyType | str:
        """Strategy type for endpoints that do not declare one."""
        return AuthStrategyType.NONE

    def default_headers(self) -> dict[str, str]:
        """Headers sent with every call; endpoint headers take precedence."""
        return {}

    def rate_limit(self) -> int:
        """Maximum calls per local rate limit window."""
        return self._config.rate_limit

    def rate_limit_window_length(self) -> float:
        """Length of the local rate limit window in seconds."""
        return self._config.rate_limit_window_length

    def use_auth_strategies(self) -> Iterable[AuthStrategy]:
        """Strategy instances this service uses. NONE is always available."""
        return []

    def is_api_error(self, error: BaseException) -> bool:
        """Whether an exception came from the provider and should go through the error hooks."""
        return isinstance(error, TransportError)

    def is_auth_error(self, api_call: APICall, error: BaseException) -> bool:
        """Service-level auth error classification, consulted by on_api_error."""
        return False

    def on_auth_error(
        self,
        params: CallParams,
        auth_strategy: AuthStrategy,
        api_call: APICall,
        error: BaseException,
    ) -> ErrorOutcome:
        """Delegates to the strategy's on_auth_error, which fails by default."""
        return auth_strategy.on_auth_error(self, params, api_call, error)

    async def on_api_error(
        self,
        params: CallParams,
        auth_strategy: AuthStrategy,
        api_call: APICall,
        error: BaseException,
    ) -> ErrorOutcome:
        """
        Service-level reaction to a provider error.

        Runs after the strategy's ``on_api_error`` unless the strategy
        asked for a retry. Return Handled to swallow the error or Retry
        with a rebuilt call; the default logs in verbose mode, hands auth
        errors to ``on_auth_error`` and otherwise lets the error bubble.
        """
        if self._config.verbose:
            self.log_api_error(api_call, error)
        if self.is_auth_error(api_call, error):
            return self.on_auth_error(params, auth_strategy, api_call, error)
        return Bubble(error)

    def on_api_success_response(self, api_call: APICall) -> None:
        """Called with every successful attempt before normalization."""
        if self._config.dry_run and not self._config.verbose:
            self._logger.debug(f"(dry run) {self.name}.{api_call.endpoint.name}")
        elif self._config.verbose:
            self.log_api_response(api_call)

    def humanize_error(self, error: BaseException | None) -> HumanizedError:
        """User-facing title and detail for an error raised by ``call()``."""
        return default_humanize_error(error)

    # === Logging ===

    def log_api_response(self, api_call: APICall) -> None:
        dry_run = "(dry run) " if self._config.dry_run else ""
        self._logger.debug(f"{dry_run}{self.name} API response\n{api_call.describe()}")

    def log_api_error(self, api_call: APICall, error: BaseException) -> None:
        status = getattr(error, "status", None)
        data = getattr(error, "data", None)
        self._logger.error(
            f"{self.name} API error: {status} {error}\n"
            f"{api_call.describe()}\n"
            f"Response data: {data!r}"
        )

    # === Rate limit window introspection ===

    def next_rate_limit_window(self) -> float:
        """Clock time at which the current rate limit window ends."""
        return self._limiter.next_window_start()

    def last_window_overflow(self) -> int:
        """Calls rejected in the previous rate limit window."""
        return self._limiter.last_overflow()

    def rate_limit_window_counter(self) -> int:
        """Calls admitted so far in the current rate limit window."""
        return self._limiter.counter()

    def reset_rate_limit_window(self) -> None:
        self._limiter.reset()

    # === Lifecycle ===

    async def aclose(self) -> None:
        """Close the default transport if the service created it."""
        if self._owns_transport and isinstance(self._transport, HTTPXTransport):
            await self._transport.aclose()

    async def __aenter__(self) -> RemoteAPI:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"{self.name}(endpoints={self._endpoint_registry.names()})"


__all__ = ["RemoteAPI"]
