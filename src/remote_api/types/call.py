# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Per-invocation call types.

CallParams is what a caller hands to ``call()``. An APICall holds one
attempt's mutable request/response state; it is owned by the pipeline
invocation that built it and never shared across concurrent calls. A
retry produces a new APICall that shares the same Endpoint.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from .endpoint import Endpoint


@dataclass
class CallParams:
    """
    Parameters of one call.

    Attributes:
        path_params: Values for ':name' placeholders in the URL template
        query: Query parameters, passed to the transport separately
        payload: Request body
        auth: Credential data read by the auth strategy (e.g. access_token)
        context: Opaque caller data forwarded to event listeners
    """

    path_params: dict[str, Any] | None = None
    query: dict[str, Any] | None = None
    payload: Any = None
    auth: dict[str, Any] | None = None
    context: Any = None

    @classmethod
    def coerce(cls, params: CallParams | Mapping[str, Any] | None) -> CallParams:
        """Accept a CallParams, a plain mapping with the same keys, or None."""
        if params is None:
            return cls()
        if isinstance(params, CallParams):
            return params
        if isinstance(params, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = set(params) - known
            if unknown:
                raise TypeError(
                    f"Unknown call parameter(s): {', '.join(sorted(unknown))}"
                )
            return cls(**params)
        raise TypeError(f"Cannot build CallParams from {type(params).__name__}")


@dataclass
class Request:
    """The outgoing side of an APICall."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, Any] | None = None
    payload: Any = None
    auth: dict[str, Any] | None = None


@dataclass
class Response:
    """
    A provider response as seen by the pipeline.

    Attributes:
        status: HTTP status code
        headers: Response headers
        data: Parsed body; replaced in place by normalization
        reason: Status reason phrase, if known
    """

    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class APICall:
    """
    One attempt's request/response state.

    The response can be recorded once; recording a second response for the
    same attempt is a programming error.
    """

    def __init__(self, endpoint: Endpoint, request: Request) -> None:
        self.endpoint = endpoint
        self.request = request
        self._response: Response | None = None
        self._responded = False

    @property
    def response(self) -> Response | None:
        return self._response

    @response.setter
    def response(self, value: Response | None) -> None:
        if self._responded:
            raise RuntimeError(
                f"Response already recorded for API call {self.endpoint.name}"
            )
        self._response = value
        self._responded = True

    @property
    def has_response(self) -> bool:
        return self._responded

    def describe(self) -> str:
        """Render a readable multi-line summary for log messages."""
        lines = [f"{self.endpoint.name}: {self.endpoint.method} {self.endpoint.url}"]
        if self.request.url != self.endpoint.url:
            lines.append(f"URL: {self.request.url}")
        if self.request.query:
            lines.append(f"Query: {_dump(self.request.query)}")
        if self.request.headers:
            lines.append(f"Headers: {_dump(_redact(self.request.headers))}")
        if self.request.payload is not None:
            lines.append(f"Payload: {_dump(self.request.payload)}")
        if self._response is not None:
            reason = f" {self._response.reason}" if self._response.reason else ""
            lines.append(f"Response: {self._response.status}{reason}")
            lines.append(_dump(self._response.data))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"APICall(endpoint={self.endpoint.name!r}, "
            f"method={self.request.method!r}, url={self.request.url!r})"
        )


_SENSITIVE_HEADERS = frozenset({"authorization", "x-api-key", "proxy-authorization"})


def _redact(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        k: ("***" if k.lower() in _SENSITIVE_HEADERS else v) for k, v in headers.items()
    }


def _dump(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, default=str)
    except (TypeError, ValueError):
        return repr(value)


__all__ = ["APICall", "CallParams", "Request", "Response"]
