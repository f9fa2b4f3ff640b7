"""Tests for the httpx-backed transport."""

import json

import httpx
import pytest

from remote_api.exceptions import TransportError
from remote_api.protocols import TransportProtocol
from remote_api.transport import HTTPXTransport


def make_transport(handler) -> HTTPXTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HTTPXTransport(client=client)


def test_satisfies_transport_protocol():
    assert isinstance(make_transport(lambda request: httpx.Response(200)), TransportProtocol)


class TestRequests:
    @pytest.mark.asyncio
    async def test_json_body_and_query(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(201, json={"id": "m-1"})

        transport = make_transport(handler)
        response = await transport.request(
            "POST",
            "https://mail.example.com/messages",
            {"Authorization": "Bearer abc"},
            {"draft": "true"},
            {"to": "a@example.com"},
        )

        assert response.status == 201
        assert response.data == {"id": "m-1"}
        assert response.reason == "Created"
        request = seen[0]
        assert request.method == "POST"
        assert request.url.params["draft"] == "true"
        assert request.headers["authorization"] == "Bearer abc"
        assert json.loads(request.content) == {"to": "a@example.com"}

    @pytest.mark.asyncio
    async def test_raw_body_is_sent_as_content(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.content)
            return httpx.Response(200, text="ok")

        transport = make_transport(handler)
        response = await transport.request(
            "POST", "https://files.example.com/upload", {}, None, b"\x00\x01"
        )

        assert seen == [b"\x00\x01"]
        assert response.data == "ok"

    @pytest.mark.asyncio
    async def test_empty_body(self):
        transport = make_transport(lambda request: httpx.Response(204))
        response = await transport.request(
            "DELETE", "https://files.example.com/1", {}, None, None
        )
        assert response.status == 204
        assert response.data is None


class TestErrors:
    @pytest.mark.asyncio
    async def test_non_2xx_raises_with_status_and_body(self):
        transport = make_transport(
            lambda request: httpx.Response(401, json={"error": "invalid_token"})
        )

        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "https://mail.example.com/me", {}, None, None)

        error = exc_info.value
        assert error.status == 401
        assert error.data == {"error": "invalid_token"}
        assert error.response is not None
        assert error.response.status == 401

    @pytest.mark.asyncio
    async def test_connection_failure_is_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(handler)

        with pytest.raises(TransportError) as exc_info:
            await transport.request("GET", "https://mail.example.com/me", {}, None, None)

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


class TestOwnership:
    @pytest.mark.asyncio
    async def test_given_client_is_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        async with HTTPXTransport(client=client):
            pass
        assert not client.is_closed
        await client.aclose()

    @pytest.mark.asyncio
    async def test_created_client_is_closed(self):
        transport = HTTPXTransport(timeout=5.0)
        await transport.aclose()
        assert transport._client.is_closed
