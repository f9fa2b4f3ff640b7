# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Default transport backed by httpx.

The transport does one HTTP exchange per request and nothing else: no
retries, no backoff, no caching. Timeouts and connection pooling are the
httpx client's. Non-2xx answers raise TransportError carrying the status,
headers and parsed body so auth strategies can classify them.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .exceptions import TransportError
from .types.call import Response

logger = logging.getLogger(__name__)


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            logger.debug(f"Invalid JSON body from {response.request.url}")
    return response.text


class HTTPXTransport:
    """
    Transport sending requests through an ``httpx.AsyncClient``.

    Args:
        client: Client to use; one is created (and owned) if None
        timeout: Timeout in seconds for a created client

    Example:
        >>> async with HTTPXTransport(timeout=10.0) as transport:
        ...     service = GitHubAPI(transport=transport)
        ...     await service.call("get_user", {"path_params": {"username": "x"}})
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        query: dict[str, Any] | None,
        body: Any,
    ) -> Response:
        kwargs: dict[str, Any] = {"headers": headers, "params": query}
        if body is not None:
            if isinstance(body, (bytes, str)):
                kwargs["content"] = body
            else:
                kwargs["json"] = body

        try:
            http_response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        response = Response(
            status=http_response.status_code,
            headers=dict(http_response.headers),
            data=_parse_body(http_response),
            reason=http_response.reason_phrase or None,
        )
        if not response.ok:
            raise TransportError(
                f"{method} {url} returned {response.status}",
                status=response.status,
                headers=response.headers,
                data=response.data,
                response=response,
            )
        return response

    async def aclose(self) -> None:
        """Close the client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HTTPXTransport:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["HTTPXTransport"]
