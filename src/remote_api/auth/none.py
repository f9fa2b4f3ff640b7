# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Strategy for endpoints that need no credentials."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..types.auth import AuthStrategyType
from ..types.outcome import Bubble, ErrorOutcome
from .base import AuthStrategy

if TYPE_CHECKING:
    from ..types.call import APICall, CallParams


class NoneAuthStrategy(AuthStrategy):
    """Passes calls through untouched and never classifies errors as auth errors."""

    def type(self) -> AuthStrategyType:
        return AuthStrategyType.NONE

    def execute(self, service: Any, api_call: APICall) -> APICall:
        return api_call

    async def on_api_error(
        self,
        service: Any,
        params: CallParams,
        api_call: APICall,
        error: BaseException,
    ) -> ErrorOutcome:
        return Bubble(error)
