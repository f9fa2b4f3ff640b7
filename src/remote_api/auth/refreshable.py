# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Bearer token strategy with refresh-and-retry.

When the provider reports an expired access token, the strategy refreshes
it, rebuilds the call with the new token and the original payload, and
returns a Retry outcome. The pipeline dispatches the rebuilt call once;
if that attempt asks for another retry the call fails with
AuthenticationFailedError.

Concurrent calls that all hit an expired token each refresh on their own;
there is no coordination between them.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING, Any, Union

from ..exceptions import AuthenticationFailedError, ConfigurationError
from ..types.auth import AccessTokenResponse, AuthStrategyType
from ..types.call import Response
from ..types.outcome import ErrorOutcome, Retry
from .base import IsAuthErrorFunc, OnAuthErrorFunc
from .bearer import BearerTokenAuthStrategy

if TYPE_CHECKING:
    from ..types.call import APICall, CallParams

logger = logging.getLogger(__name__)

RefreshResult = Union[AccessTokenResponse, Response, Mapping[str, Any]]
RefreshFunc = Callable[
    ["CallParams"], Union[Awaitable[RefreshResult], RefreshResult]
]
ExpiredTokenFunc = Callable[["APICall", BaseException], bool]
BuildRefreshParamsFunc = Callable[["CallParams"], "CallParams"]


class RefreshableBearerTokenAuthStrategy(BearerTokenAuthStrategy):
    """
    Bearer token strategy that refreshes an expired token and retries once.

    Args:
        is_access_token_expired_error: Decides whether an error means the
            access token expired
        refresh_access_token: Called with the (optionally rebuilt) call
            params; may be sync or async and may return an
            AccessTokenResponse, a Response wrapping one, or a mapping with
            an ``access_token`` key
        build_refresh_params: Optional function turning the failed call's
            params into the params passed to ``refresh_access_token``
        is_auth_error: Optional auth error classifier for non-expiry errors
        on_auth_error: Optional auth error handler for non-expiry errors

    Both ``is_access_token_expired_error`` and ``refresh_access_token`` can
    instead be implemented by overriding the methods of the same name.

    Example:
        >>> strategy = RefreshableBearerTokenAuthStrategy(
        ...     is_access_token_expired_error=lambda call, err: err.status == 401,
        ...     refresh_access_token=oauth.refresh,
        ...     build_refresh_params=lambda p: CallParams(
        ...         payload={"refresh_token": p.auth["refresh_token"]}
        ...     ),
        ... )
    """

    def __init__(
        self,
        is_access_token_expired_error: ExpiredTokenFunc | None = None,
        refresh_access_token: RefreshFunc | None = None,
        build_refresh_params: BuildRefreshParamsFunc | None = None,
        is_auth_error: IsAuthErrorFunc | None = None,
        on_auth_error: OnAuthErrorFunc | None = None,
    ) -> None:
        super().__init__(is_auth_error=is_auth_error, on_auth_error=on_auth_error)
        self._is_expired = is_access_token_expired_error
        self._refresh = refresh_access_token
        self._build_refresh_params = build_refresh_params

        if self._can_detect_expiry() and not self._can_refresh():
            raise ConfigurationError(
                f"{type(self).__name__} detects expired tokens but has no "
                "refresh_access_token to refresh them"
            )

    def _can_detect_expiry(self) -> bool:
        overridden = (
            type(self).is_access_token_expired_error
            is not RefreshableBearerTokenAuthStrategy.is_access_token_expired_error
        )
        return self._is_expired is not None or overridden

    def _can_refresh(self) -> bool:
        overridden = (
            type(self).refresh_access_token
            is not RefreshableBearerTokenAuthStrategy.refresh_access_token
        )
        return self._refresh is not None or overridden

    def type(self) -> AuthStrategyType | str:
        return AuthStrategyType.REFRESHABLE_BEARER_TOKEN

    def is_access_token_expired_error(
        self, api_call: APICall, error: BaseException
    ) -> bool:
        if self._is_expired is None:
            return False
        return bool(self._is_expired(api_call, error))

    async def refresh_access_token(self, params: CallParams) -> RefreshResult:
        if self._refresh is None:
            raise ConfigurationError(
                f"{type(self).__name__} needs refresh_access_token to refresh tokens"
            )
        result = self._refresh(params)
        if inspect.isawaitable(result):
            result = await result
        return result

    def build_refresh_params(self, params: CallParams) -> CallParams:
        if self._build_refresh_params is None:
            return params
        return self._build_refresh_params(params)

    async def on_api_error(
        self,
        service: Any,
        params: CallParams,
        api_call: APICall,
        error: BaseException,
    ) -> ErrorOutcome:
        if not self.is_access_token_expired_error(api_call, error):
            return await super().on_api_error(service, params, api_call, error)

        logger.info(
            f"Access token expired for {service.name}.{api_call.endpoint.name}, "
            "refreshing"
        )
        result = await self.refresh_access_token(self.build_refresh_params(params))
        access_token = _extract_access_token(result)
        if not access_token:
            raise AuthenticationFailedError(
                self,
                params,
                api_call,
                error,
                f"Token refresh for {service.name}.{api_call.endpoint.name} "
                "returned no access token",
            )

        retry_params = dataclasses.replace(
            params,
            auth={**(params.auth or {}), "access_token": access_token},
            payload=params.payload,
        )
        new_call = service.build_api_call(
            api_call.endpoint,
            retry_params,
            self,
            overwrite_url=api_call.request.url,
        )
        return Retry(new_call, retry_params)


def _extract_access_token(result: Any) -> str | None:
    if isinstance(result, Response):
        result = result.data
    if isinstance(result, AccessTokenResponse):
        return result.access_token
    if isinstance(result, Mapping):
        token = result.get("access_token") or result.get("accessToken")
        return str(token) if token else None
    return None


__all__ = ["RefreshableBearerTokenAuthStrategy"]
