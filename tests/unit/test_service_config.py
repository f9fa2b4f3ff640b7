"""Tests for RemoteAPIConfig."""

import pytest

from remote_api.config import DRY_RUN_RESPONSE_DATA, RemoteAPIConfig


class TestRemoteAPIConfig:
    def test_defaults(self):
        config = RemoteAPIConfig()
        assert config.rate_limit == 450
        assert config.rate_limit_window_length == 20.0
        assert config.request_timeout == 30.0
        assert config.verbose is False
        assert config.dry_run is False
        assert config.metrics_enabled is True
        assert config.dry_run_response == {"message": "dry-run-response"}

    def test_dry_run_response_is_not_shared(self):
        config = RemoteAPIConfig()
        config.dry_run_response["extra"] = True
        assert RemoteAPIConfig().dry_run_response == DRY_RUN_RESPONSE_DATA

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"rate_limit": 0},
            {"rate_limit_window_length": 0},
            {"rate_limit_window_length": -1.0},
            {"request_timeout": 0},
        ],
    )
    def test_validation(self, kwargs):
        with pytest.raises(ValueError):
            RemoteAPIConfig(**kwargs)
