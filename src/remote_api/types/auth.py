# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Auth-related value types shared by endpoints and strategies."""

from dataclasses import dataclass
from enum import Enum


class AuthStrategyType(str, Enum):
    """
    Built-in authentication strategy types.

    Services may register strategies under their own string types as well;
    the registry keys strategies by whatever ``type()`` returns.

    Types:
        * **NONE**: No credentials. Always available.
        * **BEARER_TOKEN**: ``Authorization: Bearer <access_token>``.
        * **REFRESHABLE_BEARER_TOKEN**: Bearer token that is refreshed and
          the call retried once when the provider reports it expired.
        * **CUSTOM_HEADER_TOKEN**: Token sent in a provider-specific header
          such as ``X-API-KEY``.
    """

    NONE = "NONE"
    BEARER_TOKEN = "BEARER_TOKEN"
    REFRESHABLE_BEARER_TOKEN = "REFRESHABLE_BEARER_TOKEN"
    CUSTOM_HEADER_TOKEN = "CUSTOM_HEADER_TOKEN"


@dataclass
class AccessTokenResponse:
    """
    Normalized result of an access token refresh.

    Attributes:
        access_token: The new access token
        refresh_token: A rotated refresh token, if the provider issued one
        expires_in: Seconds until the access token expires
        token_type: Usually 'Bearer'
    """

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str | None = "Bearer"


def strategy_type_name(value: AuthStrategyType | str) -> str:
    """Plain name of a strategy type, for messages and metric labels."""
    return value.value if isinstance(value, Enum) else str(value)


__all__ = ["AccessTokenResponse", "AuthStrategyType", "strategy_type_name"]
