# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol for the transport that performs the actual HTTP exchange."""

from typing import Any, Protocol, runtime_checkable

from ..types.call import Response


@runtime_checkable
class TransportProtocol(Protocol):
    """
    Minimal protocol for dispatching a request.

    The engine does not pool connections or retry on its own; timeouts and
    connection handling belong to the transport. Implementations raise
    TransportError (carrying status, headers and data) for non-success
    responses.
    """

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        query: dict[str, Any] | None,
        body: Any,
    ) -> Response:
        """
        Send one request.

        Args:
            method: Upper-cased HTTP verb
            url: Absolute URL without query string
            headers: Request headers
            query: Query parameters to encode
            body: Request payload, or None

        Returns:
            The provider Response

        Raises:
            TransportError: If the provider answers with a non-success status
        """
        ...
