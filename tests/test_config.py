"""
Tests for configuration module.

This module tests the Config class and its methods for resolving
configuration from command-line arguments and environment variables.
"""

import argparse
import os
from unittest.mock import patch

import pytest

from wordy_client.config import (
    DEFAULT_LOG_LEVEL,
    ENV_API_KEY,
    ENV_API_SECRET,
    ENV_CUSTOMER_ID,
    ENV_ENDPOINT,
    ENV_LOG_LEVEL,
    ENV_PAYMENT_ENDPOINT,
    ENV_TIMEOUT,
    Config,
)
from wordy_client.constants import API_ENDPOINT, PAYMENT_ENDPOINT
from wordy_client.transport import DEFAULT_TIMEOUT

CREDENTIAL_ARGS = ["--api-key", "key", "--api-secret", "secret", "--customer-id", "3"]

# =============================================================================
# CONFIG INITIALIZATION TESTS
# =============================================================================


@pytest.mark.unit
class TestConfigInitialization:
    """Tests for Config dataclass initialization."""

    def test_valid_config_creation(self):
        config = Config(api_key="key", api_secret="secret", customer_id=1)

        assert config.endpoint == API_ENDPOINT
        assert config.payment_endpoint == PAYMENT_ENDPOINT
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.log_level == DEFAULT_LOG_LEVEL

    def test_config_is_frozen(self):
        config = Config(api_key="key", api_secret="secret", customer_id=1)

        with pytest.raises(AttributeError):
            config.api_key = "other"  # type: ignore[misc]

    def test_secret_not_in_repr(self):
        config = Config(api_key="key", api_secret="very-secret", customer_id=1)

        assert "very-secret" not in repr(config)

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"api_key": ""}, "api_key cannot be empty"),
            ({"api_secret": ""}, "api_secret cannot be empty"),
            ({"customer_id": 0}, "customer_id must be a positive integer"),
            ({"endpoint": ""}, "endpoint cannot be empty"),
            ({"timeout": 0}, "timeout must be a positive number"),
            ({"timeout": -5.0}, "timeout must be a positive number"),
            ({"log_level": "LOUD"}, "log_level must be one of"),
        ],
    )
    def test_invalid_values_raise(self, kwargs, message):
        values = {"api_key": "key", "api_secret": "secret", "customer_id": 1, **kwargs}

        with pytest.raises(ValueError, match=message):
            Config(**values)

    def test_other_values_checked_without_credentials(self):
        config = Config(api_key="", api_secret="", customer_id=0, credentials_required=False)

        assert config.api_secret == ""
        with pytest.raises(ValueError, match="timeout must be a positive number"):
            Config(api_key="", api_secret="", customer_id=0, timeout=0, credentials_required=False)


# =============================================================================
# CONFIG FROM ARGS TESTS
# =============================================================================


@pytest.mark.unit
class TestConfigFromArgs:
    """Tests for Config.from_args() precedence: CLI > ENV > DEFAULT."""

    def test_credentials_from_cli(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(CREDENTIAL_ARGS)

        assert (config.api_key, config.api_secret, config.customer_id) == ("key", "secret", 3)
        assert config.endpoint == API_ENDPOINT

    def test_credentials_from_env(self):
        env = {ENV_API_KEY: "env-key", ENV_API_SECRET: "env-secret", ENV_CUSTOMER_ID: "8"}
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_args([])

        assert (config.api_key, config.api_secret, config.customer_id) == (
            "env-key",
            "env-secret",
            8,
        )

    def test_cli_overrides_env(self):
        env = {ENV_API_KEY: "env-key", ENV_ENDPOINT: "http://env.test/", ENV_TIMEOUT: "12"}
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_args(
                CREDENTIAL_ARGS + ["--endpoint", "http://cli.test/", "--timeout", "3"]
            )

        assert config.api_key == "key"
        assert config.endpoint == "http://cli.test/"
        assert config.timeout == 3.0

    def test_env_endpoint_timeout_and_log_level(self):
        env = {
            ENV_ENDPOINT: "http://stage.test/api/version/2/",
            ENV_PAYMENT_ENDPOINT: "http://stage.test/pay/",
            ENV_TIMEOUT: "7.5",
            ENV_LOG_LEVEL: "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_args(CREDENTIAL_ARGS)

        assert config.endpoint == "http://stage.test/api/version/2/"
        assert config.payment_endpoint == "http://stage.test/pay/"
        assert config.timeout == 7.5
        assert config.log_level == "DEBUG"

    def test_log_level_from_cli_is_uppercased(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(CREDENTIAL_ARGS + ["--log-level", "info"])

        assert config.log_level == "INFO"

    def test_missing_credentials_raise(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="api_key cannot be empty"):
                Config.from_args([])

    def test_credentials_optional_when_not_required(self):
        with patch.dict(os.environ, {}, clear=True):
            parser = argparse.ArgumentParser()
            Config.add_arguments(parser)
            config = Config.from_namespace(parser.parse_args([]), require_credentials=False)

        assert config.api_key == ""
        assert config.customer_id == 0
        assert config.credentials_required is False

    def test_non_integer_customer_id_env_raises(self):
        env = {ENV_API_KEY: "k", ENV_API_SECRET: "s", ENV_CUSTOMER_ID: "abc"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValueError, match=ENV_CUSTOMER_ID):
                Config.from_args([])

    def test_unknown_args_ignored(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_args(CREDENTIAL_ARGS + ["account"])

        assert config.customer_id == 3
