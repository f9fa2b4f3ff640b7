"""Tests for the none, bearer and custom header auth strategies."""

from types import SimpleNamespace

import pytest

from remote_api.auth import (
    BearerTokenAuthStrategy,
    CustomHeaderTokenAuthStrategy,
    NoneAuthStrategy,
)
from remote_api.exceptions import (
    AuthenticationFailedError,
    InvalidAuthParamsError,
    TransportError,
)
from remote_api.types import (
    APICall,
    AuthStrategyType,
    Bubble,
    CallParams,
    Endpoint,
    Handled,
    Request,
)

SERVICE = SimpleNamespace(name="CRMAPI")


def make_call(auth=None) -> APICall:
    endpoint = Endpoint("list_contacts", "GET", "/contacts")
    return APICall(
        endpoint,
        Request(method="GET", url="https://crm.example.com/contacts", auth=auth),
    )


class TestNoneAuthStrategy:
    def test_execute_leaves_call_untouched(self):
        call = make_call()
        assert NoneAuthStrategy().execute(SERVICE, call) is call
        assert call.request.headers == {}

    @pytest.mark.asyncio
    async def test_never_classifies_errors(self):
        error = TransportError("unauthorized", status=401)
        outcome = await NoneAuthStrategy().on_api_error(
            SERVICE, CallParams(), make_call(), error
        )
        assert outcome == Bubble(error)

    def test_type(self):
        assert NoneAuthStrategy().type() is AuthStrategyType.NONE


class TestBearerTokenAuthStrategy:
    def test_sets_authorization_header(self):
        call = BearerTokenAuthStrategy().execute(
            SERVICE, make_call(auth={"access_token": "abc"})
        )
        assert call.request.headers["Authorization"] == "Bearer abc"

    @pytest.mark.parametrize("auth", [None, {}, {"access_token": ""}])
    def test_missing_token(self, auth):
        with pytest.raises(InvalidAuthParamsError, match="CRMAPI.list_contacts"):
            BearerTokenAuthStrategy().execute(SERVICE, make_call(auth=auth))

    @pytest.mark.asyncio
    async def test_errors_bubble_by_default(self):
        error = TransportError("unauthorized", status=401)
        outcome = await BearerTokenAuthStrategy().on_api_error(
            SERVICE, CallParams(), make_call(), error
        )
        assert outcome == Bubble(error)

    @pytest.mark.asyncio
    async def test_auth_error_fails_authentication_by_default(self):
        strategy = BearerTokenAuthStrategy(
            is_auth_error=lambda call, err: err.status == 401
        )
        error = TransportError("unauthorized", status=401)

        with pytest.raises(AuthenticationFailedError) as exc_info:
            await strategy.on_api_error(SERVICE, CallParams(), make_call(), error)

        assert exc_info.value.auth_strategy is strategy
        assert exc_info.value.error is error
        assert "CRMAPI.list_contacts" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_injected_auth_error_handler(self):
        seen = []

        def on_auth_error(service, strategy, params, call, err):
            seen.append((service, strategy, err))
            return Handled()

        strategy = BearerTokenAuthStrategy(
            is_auth_error=lambda call, err: True, on_auth_error=on_auth_error
        )
        error = TransportError("unauthorized", status=401)

        outcome = await strategy.on_api_error(SERVICE, CallParams(), make_call(), error)

        assert outcome == Handled()
        assert seen == [(SERVICE, strategy, error)]

    def test_repr(self):
        assert repr(BearerTokenAuthStrategy()) == "BearerTokenAuthStrategy(type=BEARER_TOKEN)"


class TestCustomHeaderTokenAuthStrategy:
    def test_default_header(self):
        call = CustomHeaderTokenAuthStrategy().execute(
            SERVICE, make_call(auth={"access_token": "key-1"})
        )
        assert call.request.headers["X-API-KEY"] == "key-1"

    def test_header_prefix_and_credential_key(self):
        strategy = CustomHeaderTokenAuthStrategy(
            header="Authorization", prefix="Token ", credential_key="api_key"
        )
        call = strategy.execute(SERVICE, make_call(auth={"api_key": "k"}))
        assert call.request.headers["Authorization"] == "Token k"

    def test_missing_credential(self):
        strategy = CustomHeaderTokenAuthStrategy(credential_key="api_key")
        with pytest.raises(InvalidAuthParamsError, match="api_key"):
            strategy.execute(SERVICE, make_call(auth={"access_token": "x"}))

    def test_custom_strategy_type(self):
        strategy = CustomHeaderTokenAuthStrategy(strategy_type="PARTNER_KEY")
        assert strategy.type() == "PARTNER_KEY"
        assert CustomHeaderTokenAuthStrategy().type() is AuthStrategyType.CUSTOM_HEADER_TOKEN

    def test_empty_header_rejected(self):
        with pytest.raises(ValueError):
            CustomHeaderTokenAuthStrategy(header="")
