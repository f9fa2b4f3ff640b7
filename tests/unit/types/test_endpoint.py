"""Tests for the Endpoint descriptor."""

import dataclasses

import pytest

from remote_api.types import AuthStrategyType, Endpoint, HTTPMethod
from remote_api.types.endpoint import SUPPORTED_METHODS


class TestEndpoint:
    def test_method_is_upper_cased(self):
        assert Endpoint("list", "get", "/items").method == "GET"

    def test_http_method_enum_is_stored_as_string(self):
        endpoint = Endpoint("create", HTTPMethod.POST, "/items")
        assert endpoint.method == "POST"
        assert type(endpoint.method) is str

    def test_is_frozen(self):
        endpoint = Endpoint("list", "GET", "/items")
        with pytest.raises(dataclasses.FrozenInstanceError):
            endpoint.url = "/other"  # type: ignore[misc]

    def test_headers_are_read_only(self):
        endpoint = Endpoint("list", "GET", "/items", headers={"X-Trace": "1"})
        with pytest.raises(TypeError):
            endpoint.headers["X-Trace"] = "2"  # type: ignore[index]

    def test_mapping_normalization_is_read_only(self):
        endpoint = Endpoint("list", "GET", "/items", normalize={"id": "data.id"})
        with pytest.raises(TypeError):
            endpoint.normalize["id"] = "x"  # type: ignore[index]

    def test_function_normalization_kept_as_is(self):
        def rule(service, params, raw):
            return raw

        assert Endpoint("list", "GET", "/items", normalize=rule).normalize is rule

    @pytest.mark.parametrize("name,url", [("", "/items"), ("list", "")])
    def test_rejects_empty_name_or_url(self, name, url):
        with pytest.raises(ValueError):
            Endpoint(name, "GET", url)

    def test_is_absolute(self):
        assert Endpoint("a", "GET", "https://x.example.com/a").is_absolute
        assert not Endpoint("b", "GET", "/b").is_absolute

    def test_auth_defaults_to_none(self):
        assert Endpoint("a", "GET", "/a").auth is None
        endpoint = Endpoint("b", "GET", "/b", auth=AuthStrategyType.BEARER_TOKEN)
        assert endpoint.auth is AuthStrategyType.BEARER_TOKEN


def test_supported_methods():
    assert SUPPORTED_METHODS == {"GET", "POST", "PATCH", "DELETE"}
