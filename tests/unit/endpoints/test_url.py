"""Tests for URL template resolution."""

import pytest

from remote_api.endpoints.url import URLResolver, placeholders
from remote_api.exceptions import ConfigurationError, MissingPathParameterError


@pytest.fixture
def resolver() -> URLResolver:
    return URLResolver("https://api.example.com")


class TestResolve:
    def test_relative_template_gets_base_url(self, resolver):
        url = resolver.resolve("/users/:userId/details", {"userId": "123"})
        assert url == "https://api.example.com/users/123/details"

    def test_placeholder_at_end(self, resolver):
        assert resolver.resolve("/users/:id", {"id": 7}) == "https://api.example.com/users/7"

    def test_absolute_template_ignores_base_url(self, resolver):
        url = resolver.resolve("https://other.example.com/v2/:id", {"id": "a"})
        assert url == "https://other.example.com/v2/a"

    def test_port_is_not_a_placeholder(self, resolver):
        url = resolver.resolve("http://localhost:8080/items/:id", {"id": "1"})
        assert url == "http://localhost:8080/items/1"

    def test_longer_name_is_not_confused_with_prefix(self, resolver):
        url = resolver.resolve(
            "/u/:user/:user_id", {"user": "alice", "user_id": "42"}
        )
        assert url == "https://api.example.com/u/alice/42"

    def test_values_are_not_escaped(self, resolver):
        url = resolver.resolve("/search/:term", {"term": "a b/c"})
        assert url == "https://api.example.com/search/a b/c"

    def test_missing_values_are_all_reported(self, resolver):
        with pytest.raises(MissingPathParameterError) as exc_info:
            resolver.resolve("/orgs/:org/repos/:repo", {"org": "x"})
        assert exc_info.value.missing == ["repo"]

        with pytest.raises(MissingPathParameterError) as exc_info:
            resolver.resolve("/orgs/:org/repos/:repo", None)
        assert exc_info.value.missing == ["org", "repo"]

    def test_none_value_counts_as_missing(self, resolver):
        with pytest.raises(MissingPathParameterError):
            resolver.resolve("/users/:id", {"id": None})

    def test_extra_params_are_ignored(self, resolver):
        assert resolver.resolve("/ping", {"unused": 1}) == "https://api.example.com/ping"

    def test_trailing_slash_on_base_url(self):
        resolver = URLResolver("https://api.example.com/v1/")
        assert resolver.resolve("/ping") == "https://api.example.com/v1/ping"

    def test_relative_template_without_base_url(self):
        with pytest.raises(ConfigurationError):
            URLResolver(None).resolve("/ping")


def test_placeholders():
    assert placeholders("https://h:443/a/:x/b/:y_2") == ["x", "y_2"]
