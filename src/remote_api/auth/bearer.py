# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Token strategies that send a static credential with every call."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..types.auth import AuthStrategyType
from .base import AuthStrategy, IsAuthErrorFunc, OnAuthErrorFunc

if TYPE_CHECKING:
    from ..types.call import APICall


class BearerTokenAuthStrategy(AuthStrategy):
    """
    Sends ``Authorization: Bearer <access_token>``.

    The token is read from ``params.auth['access_token']``; a call without
    one fails with InvalidAuthParamsError before it is dispatched.
    """

    def type(self) -> AuthStrategyType | str:
        return AuthStrategyType.BEARER_TOKEN

    def execute(self, service: Any, api_call: APICall) -> APICall:
        token = self._require_credential(service, api_call)
        api_call.request.headers["Authorization"] = f"Bearer {token}"
        return api_call


class CustomHeaderTokenAuthStrategy(AuthStrategy):
    """
    Sends the token in a provider-specific header.

    Args:
        header: Header name, ``X-API-KEY`` by default
        prefix: Optional value prefix (e.g. ``"Token "``)
        credential_key: Key of the token in ``params.auth``
        strategy_type: Type to register under; override it when one service
            uses several custom header schemes

    Example:
        >>> CustomHeaderTokenAuthStrategy(header="X-Api-Token")
    """

    def __init__(
        self,
        header: str = "X-API-KEY",
        prefix: str = "",
        credential_key: str = "access_token",
        strategy_type: AuthStrategyType | str = AuthStrategyType.CUSTOM_HEADER_TOKEN,
        is_auth_error: IsAuthErrorFunc | None = None,
        on_auth_error: OnAuthErrorFunc | None = None,
    ) -> None:
        super().__init__(is_auth_error=is_auth_error, on_auth_error=on_auth_error)
        if not header:
            raise ValueError("header must not be empty")
        self.header = header
        self.prefix = prefix
        self.credential_key = credential_key
        self._strategy_type = strategy_type

    def type(self) -> AuthStrategyType | str:
        return self._strategy_type

    def execute(self, service: Any, api_call: APICall) -> APICall:
        token = self._require_credential(service, api_call, self.credential_key)
        api_call.request.headers[self.header] = f"{self.prefix}{token}"
        return api_call
