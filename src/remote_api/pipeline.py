# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
The call pipeline.

One ``call()`` runs these steps in order:

1. Look up the endpoint.
2. Pick the auth strategy: the endpoint's own, else the service default.
3. Build the APICall: resolve the URL (or take ``overwrite_url`` as is),
   merge default and endpoint headers, copy params, run the strategy.
4. Validate the HTTP method.
5. Emit ``before``.
6. Attempt: admit through the rate limiter, dispatch, record the response.
   A provider error goes to the strategy's ``on_api_error`` and then,
   unless the strategy asked for a retry, to the service's. A Retry
   dispatches the rebuilt call once more; a Handled ends the call with
   its response; otherwise the original error propagates.
7. On failure emit ``error`` then ``after`` and re-raise.
8. On success run the success hook, normalize, emit ``success`` then
   ``after`` and return the response.

Steps 1-4 fail before any event is emitted and before anything reaches
the rate limiter or transport.
"""

from __future__ import annotations

import inspect
import logging
import time
from typing import TYPE_CHECKING, Any

from .config import RemoteAPIConfig
from .endpoints.url import URLResolver
from .events import EndpointEvent, EventPhase, event_name
from .exceptions import (
    AuthenticationFailedError,
    InvalidMethodError,
    LocalRateLimitExceededError,
)
from .normalizer import ResponseNormalizer
from .types.call import APICall, CallParams, Request, Response
from .types.endpoint import SUPPORTED_METHODS
from .types.outcome import Bubble, ErrorOutcome, Handled, Retry

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .auth.base import AuthStrategy
    from .auth.registry import AuthRegistry
    from .endpoints.registry import EndpointRegistry
    from .limiter import RateLimiter
    from .observability.collector import MetricsCollector
    from .protocols.events import EventSinkProtocol
    from .protocols.transport import TransportProtocol
    from .service import RemoteAPI
    from .types.endpoint import Endpoint

logger = logging.getLogger(__name__)


class CallPipeline:
    """
    Runs calls for one service against its owned state.

    The pipeline holds the service's endpoint registry, auth registry and
    rate limiter, and calls back into the service for its hooks. Services
    build one pipeline at construction; adapters use ``RemoteAPI.call``
    rather than the pipeline directly.
    """

    def __init__(
        self,
        service: RemoteAPI,
        endpoints: EndpointRegistry,
        auth: AuthRegistry,
        limiter: RateLimiter,
        transport: TransportProtocol,
        events: EventSinkProtocol,
        config: RemoteAPIConfig | None = None,
        metrics: MetricsCollector | None = None,
        normalizer: ResponseNormalizer | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.service = service
        self.endpoints = endpoints
        self.auth = auth
        self.limiter = limiter
        self.transport = transport
        self.events = events
        self.config = config or RemoteAPIConfig()
        self.metrics = metrics
        self._logger = log or logger
        self.normalizer = normalizer or ResponseNormalizer(self._logger)

    # === Building ===

    def resolve_strategy(self, endpoint: Endpoint) -> AuthStrategy:
        """
        Strategy for an endpoint: its own type, else the service default.

        Raises:
            AuthStrategyNotConfiguredError: If the service has no such strategy
        """
        strategy_type = endpoint.auth
        if strategy_type is None:
            strategy_type = self.service.default_auth_strategy()
        return self.auth.get(strategy_type, endpoint.name)

    def build_api_call(
        self,
        endpoint: Endpoint,
        params: CallParams | Mapping[str, Any] | None,
        strategy: AuthStrategy,
        overwrite_url: str | None = None,
    ) -> APICall:
        """
        Build one attempt's APICall and attach credentials.

        ``overwrite_url`` is used verbatim; path parameters are then ignored.
        Endpoint headers win over the service default headers.
        """
        params = CallParams.coerce(params)
        if overwrite_url is not None:
            url = overwrite_url
        else:
            # base_url() is read on every build
            resolver = URLResolver(self.service.base_url())
            url = resolver.resolve(endpoint.url, params.path_params)
        headers = {**self.service.default_headers(), **(endpoint.headers or {})}
        request = Request(
            method=endpoint.method,
            url=url,
            headers=headers,
            query=dict(params.query) if params.query is not None else None,
            payload=params.payload,
            auth=dict(params.auth) if params.auth is not None else None,
        )
        return strategy.execute(self.service, APICall(endpoint, request))

    def validate(self, api_call: APICall) -> None:
        method = api_call.request.method.upper()
        if method not in SUPPORTED_METHODS:
            raise InvalidMethodError(api_call.request.method)

    # === Calling ===

    async def call(
        self,
        name: str,
        params: CallParams | Mapping[str, Any] | None = None,
        context: Any = None,
        overwrite_url: str | None = None,
    ) -> Response | None:
        """
        Run one call through the pipeline.

        Returns:
            The provider Response, after normalization; None when a hook
            handled an error without a substitute response

        Raises:
            EndpointNotFoundError: Unknown endpoint name
            AuthStrategyNotConfiguredError: Strategy type not supplied by the service
            RequestConstructionError: Bad URL parameters or HTTP method
            InvalidAuthParamsError: Required credentials missing
            LocalRateLimitExceededError: Local window exhausted
            AuthenticationFailedError: Auth rejected, or a retried call asked to retry again
            Exception: The provider error, when no hook handled it
        """
        params = CallParams.coerce(params)
        if context is None:
            context = params.context

        endpoint = self.endpoints.get(name)
        strategy = self.resolve_strategy(endpoint)
        api_call = self.build_api_call(endpoint, params, strategy, overwrite_url)
        self.validate(api_call)

        self._emit(endpoint, EventPhase.BEFORE, EndpointEvent(params, api_call, context))

        started = time.perf_counter()
        attempt_params = params
        retried = False
        outcome = "success"
        try:
            while True:
                try:
                    response = await self._attempt(endpoint, api_call)
                    break
                except Exception as error:
                    if not self.service.is_api_error(error):
                        raise
                    self._count_transport_error(endpoint, error)

                    result = await self._on_api_error(
                        strategy, attempt_params, api_call, error
                    )
                    if isinstance(result, Retry):
                        if retried:
                            raise AuthenticationFailedError(
                                strategy,
                                attempt_params,
                                result.api_call,
                                error,
                                f"Authentication failed: retrying "
                                f"{self.service.name}.{endpoint.name} failed",
                            ) from error
                        retried = True
                        api_call = result.api_call
                        if result.params is not None:
                            attempt_params = result.params
                        self._count_retry(endpoint)
                        self._logger.info(
                            f"Retrying {self.service.name}.{endpoint.name}"
                        )
                        continue
                    if isinstance(result, Handled):
                        response = result.response
                        if not api_call.has_response:
                            api_call.response = response
                        outcome = "handled"
                        break
                    raise

            self.service.on_api_success_response(api_call)
            if response is not None:
                response.data = self.normalizer.normalize(
                    self.service, endpoint, params, response.data
                )
        except Exception as error:
            self._observe(endpoint, "error", started)
            event = EndpointEvent(params, api_call, context, error)
            self._emit(endpoint, EventPhase.ERROR, event)
            self._emit(endpoint, EventPhase.AFTER, event)
            raise

        self._observe(endpoint, outcome, started)
        event = EndpointEvent(params, api_call, context)
        self._emit(endpoint, EventPhase.SUCCESS, event)
        self._emit(endpoint, EventPhase.AFTER, event)
        return response

    async def _attempt(self, endpoint: Endpoint, api_call: APICall) -> Response:
        admission = self.limiter.admit(api_call)
        if not admission.admitted:
            raise LocalRateLimitExceededError(
                self.service.name, api_call, admission.retry_after
            )

        request = api_call.request
        if self.config.dry_run:
            self._logger.warning(
                f"=== API {self.service.name} is running in dry run mode... ==="
            )
            response = Response(
                status=200,
                reason="OK",
                data=dict(self.config.dry_run_response),
            )
        elif endpoint.dispatch is not None:
            response = await endpoint.dispatch(self.service, api_call)
        else:
            response = await self.transport.request(
                request.method.upper(),
                request.url,
                request.headers,
                request.query,
                request.payload,
            )

        api_call.response = response
        return response

    async def _on_api_error(
        self,
        strategy: AuthStrategy,
        params: CallParams,
        api_call: APICall,
        error: BaseException,
    ) -> ErrorOutcome:
        strategy_outcome = await strategy.on_api_error(
            self.service, params, api_call, error
        )
        if isinstance(strategy_outcome, Retry):
            return strategy_outcome

        service_outcome = self.service.on_api_error(params, strategy, api_call, error)
        if inspect.isawaitable(service_outcome):
            service_outcome = await service_outcome
        if isinstance(service_outcome, Retry):
            return service_outcome

        if isinstance(strategy_outcome, Handled):
            return strategy_outcome
        if isinstance(service_outcome, Handled):
            return service_outcome
        return Bubble(error)

    # === Events and metrics ===

    def _emit(self, endpoint: Endpoint, phase: EventPhase, event: EndpointEvent) -> None:
        name = event_name(self.service.name, endpoint.name, phase)
        try:
            self.events.emit(name, event)
        except Exception:
            self._logger.exception(f"Event sink failed on {name}")

    def _observe(self, endpoint: Endpoint, outcome: str, started: float) -> None:
        if self.metrics is not None:
            self.metrics.record_call(
                self.service.name, endpoint.name, outcome, time.perf_counter() - started
            )

    def _count_retry(self, endpoint: Endpoint) -> None:
        if self.metrics is not None:
            self.metrics.record_auth_retry(self.service.name, endpoint.name)

    def _count_transport_error(self, endpoint: Endpoint, error: BaseException) -> None:
        if self.metrics is not None:
            self.metrics.record_transport_error(
                self.service.name, endpoint.name, getattr(error, "status", None)
            )


__all__ = ["CallPipeline"]
