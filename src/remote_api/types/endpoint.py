# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Endpoint descriptor types.

An Endpoint is the static, immutable description of one remote operation.
Provider adapters declare endpoints as data in an ``endpoints`` table on
the service class; the registry builds the name -> Endpoint map once at
service construction.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

from .auth import AuthStrategyType

if TYPE_CHECKING:
    from .call import APICall, CallParams, Response


class HTTPMethod(str, Enum):
    """HTTP verbs the call pipeline accepts."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


SUPPORTED_METHODS: frozenset[str] = frozenset(m.value for m in HTTPMethod)
"""Upper-cased verbs that pass call validation."""

NormalizationMapping = Mapping[str, str]
"""Target key -> dot-notation path into the raw response data."""

NormalizationFunc = Callable[[Any, "CallParams", Any], Any]
"""Called with (service, params, raw_data); its return value replaces the data."""

NormalizationRule = Union[NormalizationMapping, NormalizationFunc]

DispatchFunc = Callable[[Any, "APICall"], Awaitable["Response"]]
"""Per-endpoint replacement for the transport, called with (service, api_call)."""


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class Endpoint:
    """
    Immutable descriptor of one remote operation.

    Attributes:
        name: Unique (per service) endpoint name, used in call() and event names
        method: HTTP verb, stored upper-cased
        url: URL template; absolute if it contains '://', else relative to
            the service base URL. Placeholders are written ':name' right
            after a '/'.
        auth: Auth strategy type; None means the service default
        headers: Static headers, merged over the service default headers
        normalize: Optional normalization rule (mapping table or function)
        dispatch: Optional coroutine function replacing the transport for
            this endpoint (e.g. a vendor SDK call)

    Example:
        >>> Endpoint(
        ...     name="get_user",
        ...     method=HTTPMethod.GET,
        ...     url="/users/:user_id",
        ...     auth=AuthStrategyType.BEARER_TOKEN,
        ...     normalize={"email": "data.email_address"},
        ... )
    """

    name: str
    method: str
    url: str
    auth: AuthStrategyType | str | None = None
    headers: Mapping[str, str] | None = field(default=None, hash=False)
    normalize: NormalizationRule | None = field(default=None, hash=False, compare=False)
    dispatch: DispatchFunc | None = field(default=None, hash=False, compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Endpoint name must not be empty")
        if not self.url:
            raise ValueError(f"Endpoint {self.name} has an empty URL template")

        object.__setattr__(self, "method", str(_enum_value(self.method)).upper())
        if self.headers is not None:
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
        if isinstance(self.normalize, Mapping):
            object.__setattr__(
                self, "normalize", MappingProxyType(dict(self.normalize))
            )

    @property
    def is_absolute(self) -> bool:
        """Whether the URL template bypasses the service base URL."""
        return "://" in self.url


__all__ = [
    "SUPPORTED_METHODS",
    "DispatchFunc",
    "Endpoint",
    "HTTPMethod",
    "NormalizationFunc",
    "NormalizationMapping",
    "NormalizationRule",
]
