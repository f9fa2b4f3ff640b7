# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base auth strategy.

An auth strategy attaches credentials to an outgoing APICall and decides
what a provider error means for authentication. One instance per strategy
type is built when the service is constructed and reused by every call of
that type, so strategies must not keep per-call state.

Per-attempt contract:
    execute(service, call) -> call
    on_api_error(service, params, call, error) -> Bubble | Handled | Retry

The default ``on_api_error`` asks ``is_auth_error`` and, when it answers
True, hands over to ``on_auth_error`` which fails with
AuthenticationFailedError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from ..exceptions import AuthenticationFailedError, InvalidAuthParamsError
from ..types.auth import AuthStrategyType, strategy_type_name
from ..types.outcome import Bubble, ErrorOutcome

if TYPE_CHECKING:
    from ..types.call import APICall, CallParams

IsAuthErrorFunc = Callable[["APICall", BaseException], bool]
OnAuthErrorFunc = Callable[
    [Any, "AuthStrategy", "CallParams", "APICall", BaseException], ErrorOutcome
]


class AuthStrategy(ABC):
    """
    Abstract base class for credential attachment and auth error policy.

    ``is_auth_error`` and ``on_auth_error`` can be overridden in a subclass
    or injected through the constructor, whichever suits the adapter.

    Example:
        >>> strategy = BearerTokenAuthStrategy(
        ...     is_auth_error=lambda call, err: getattr(err, "status", None) == 401,
        ... )
    """

    def __init__(
        self,
        is_auth_error: IsAuthErrorFunc | None = None,
        on_auth_error: OnAuthErrorFunc | None = None,
    ) -> None:
        self._is_auth_error = is_auth_error
        self._on_auth_error = on_auth_error

    @abstractmethod
    def type(self) -> AuthStrategyType | str:
        """The strategy type endpoints refer to."""
        pass

    @abstractmethod
    def execute(self, service: Any, api_call: APICall) -> APICall:
        """
        Attach credentials to the call.

        Raises:
            InvalidAuthParamsError: If required credential fields are absent
        """
        pass

    def is_auth_error(self, api_call: APICall, error: BaseException) -> bool:
        """Whether a provider error is an authentication failure. False by default."""
        if self._is_auth_error is not None:
            return bool(self._is_auth_error(api_call, error))
        return False

    def on_auth_error(
        self,
        service: Any,
        params: CallParams,
        api_call: APICall,
        error: BaseException,
    ) -> ErrorOutcome:
        """React to an authentication failure. Terminal by default."""
        if self._on_auth_error is not None:
            return self._on_auth_error(service, self, params, api_call, error)
        raise AuthenticationFailedError(
            self,
            params,
            api_call,
            error,
            f"Authentication failed for {service.name}.{api_call.endpoint.name}",
        )

    async def on_api_error(
        self,
        service: Any,
        params: CallParams,
        api_call: APICall,
        error: BaseException,
    ) -> ErrorOutcome:
        """Classify a provider error; runs before the service-level hook."""
        if self.is_auth_error(api_call, error):
            return self.on_auth_error(service, params, api_call, error)
        return Bubble(error)

    def _require_credential(
        self, service: Any, api_call: APICall, key: str = "access_token"
    ) -> str:
        auth = api_call.request.auth or {}
        value = auth.get(key)
        if not value:
            raise InvalidAuthParamsError(
                self,
                api_call,
                f"No {key} provided for API request "
                f"{service.name}.{api_call.endpoint.name}. "
                f"Pass it as params.auth['{key}'].",
            )
        return str(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={strategy_type_name(self.type())})"
