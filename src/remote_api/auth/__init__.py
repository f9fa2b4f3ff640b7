# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Authentication strategies.

Exported classes:
    AuthStrategy: Abstract base for credential attachment and auth error policy.
    NoneAuthStrategy: No credentials; always registered.
    BearerTokenAuthStrategy: ``Authorization: Bearer`` token.
    CustomHeaderTokenAuthStrategy: Token in a provider-specific header.
    RefreshableBearerTokenAuthStrategy: Bearer token refreshed and retried once.
    AuthRegistry: Per-service read-only map of strategy type -> instance.
"""

from .base import AuthStrategy
from .bearer import BearerTokenAuthStrategy, CustomHeaderTokenAuthStrategy
from .none import NoneAuthStrategy
from .refreshable import RefreshableBearerTokenAuthStrategy
from .registry import AuthRegistry

__all__ = [
    "AuthRegistry",
    "AuthStrategy",
    "BearerTokenAuthStrategy",
    "CustomHeaderTokenAuthStrategy",
    "NoneAuthStrategy",
    "RefreshableBearerTokenAuthStrategy",
]
