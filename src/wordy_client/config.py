"""
Configuration management for the ``wordy`` command-line tool.

This module handles configuration from multiple sources with the following
precedence (highest to lowest):

1. Command-line arguments (--api-key, --endpoint, --timeout, ...)
2. Environment variables (WORDY_API_KEY, WORDY_API_ENDPOINT, ...)
3. Default values

The configuration is immutable once created. The client library itself never
reads configuration; applications embedding :class:`WordyClient` pass
credentials directly.

Example:
    config = Config.from_args(["--api-key", "abc", "--api-secret", "s3cret",
                               "--customer-id", "1"])
    client = WordyClient.from_config(config)
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence
from dataclasses import dataclass, field

from wordy_client.constants import API_ENDPOINT, PAYMENT_ENDPOINT
from wordy_client.transport import DEFAULT_TIMEOUT

# =============================================================================
# DEFAULT CONFIGURATION VALUES
# =============================================================================

DEFAULT_LOG_LEVEL = "WARNING"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variable names for configuration.
ENV_API_KEY = "WORDY_API_KEY"
ENV_API_SECRET = "WORDY_API_SECRET"
ENV_CUSTOMER_ID = "WORDY_CUSTOMER_ID"
ENV_ENDPOINT = "WORDY_API_ENDPOINT"
ENV_PAYMENT_ENDPOINT = "WORDY_PAYMENT_ENDPOINT"
ENV_TIMEOUT = "WORDY_REQUEST_TIMEOUT"
ENV_LOG_LEVEL = "WORDY_LOG_LEVEL"


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================


@dataclass(frozen=True)
class Config:
    """
    Immutable configuration for a Wordy API client.

    Attributes:
        api_key: Public API key.
        api_secret: Shared API secret.
        customer_id: Customer the requests act for. Must be positive.
        endpoint: Base URL of the API.
        payment_endpoint: Base URL of the order payment page.
        timeout: HTTP request timeout in seconds.
        log_level: Name of the logging level for the CLI.
        credentials_required: Whether api_key, api_secret and customer_id
            must be set. Unsigned commands need no credentials.

    Example:
        config = Config(api_key="abc", api_secret="s3cret", customer_id=1)
    """

    api_key: str
    api_secret: str = field(repr=False)
    customer_id: int
    endpoint: str = API_ENDPOINT
    payment_endpoint: str = PAYMENT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL
    credentials_required: bool = True

    def __post_init__(self) -> None:
        """
        Validate configuration values after initialization.

        Raises:
            ValueError: If a required value is missing or out of range.
        """
        if self.credentials_required:
            if not self.api_key:
                raise ValueError("api_key cannot be empty")
            if not self.api_secret:
                raise ValueError("api_secret cannot be empty")
            if self.customer_id <= 0:
                raise ValueError("customer_id must be a positive integer")
        if not self.endpoint:
            raise ValueError("endpoint cannot be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be a positive number")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Register the configuration options on ``parser``."""
        group = parser.add_argument_group("connection")
        # None means "check env var, then use default"
        group.add_argument("--api-key", dest="api_key", default=None, help=f"API key (env: {ENV_API_KEY})")
        group.add_argument(
            "--api-secret", dest="api_secret", default=None, help=f"API secret (env: {ENV_API_SECRET})"
        )
        group.add_argument(
            "--customer-id",
            dest="customer_id",
            type=int,
            default=None,
            help=f"Customer id (env: {ENV_CUSTOMER_ID})",
        )
        group.add_argument(
            "--endpoint",
            dest="endpoint",
            default=None,
            help=f"API endpoint (default: {API_ENDPOINT})",
        )
        group.add_argument(
            "--timeout",
            "-t",
            type=float,
            default=None,
            help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
        )
        group.add_argument(
            "--log-level",
            dest="log_level",
            default=None,
            type=str.upper,
            help=f"Logging level (default: {DEFAULT_LOG_LEVEL})",
        )

    @classmethod
    def from_namespace(cls, parsed: argparse.Namespace, require_credentials: bool = True) -> Config:
        """
        Resolve a Config from parsed arguments, environment and defaults.

        Args:
            parsed: Namespace from a parser set up by :meth:`add_arguments`.
            require_credentials: Reject missing credentials. Pass False for
                calls that are sent unsigned.

        Raises:
            ValueError: If a value is missing or invalid.
        """
        api_key = parsed.api_key or os.environ.get(ENV_API_KEY, "")
        api_secret = parsed.api_secret or os.environ.get(ENV_API_SECRET, "")

        if parsed.customer_id is not None:
            customer_id = parsed.customer_id
        elif os.environ.get(ENV_CUSTOMER_ID):
            try:
                customer_id = int(os.environ[ENV_CUSTOMER_ID])
            except ValueError as e:
                raise ValueError(f"{ENV_CUSTOMER_ID} must be an integer") from e
        else:
            customer_id = 0

        endpoint = parsed.endpoint or os.environ.get(ENV_ENDPOINT) or API_ENDPOINT
        payment_endpoint = os.environ.get(ENV_PAYMENT_ENDPOINT) or PAYMENT_ENDPOINT

        if parsed.timeout is not None:
            timeout = parsed.timeout
        elif ENV_TIMEOUT in os.environ:
            timeout = float(os.environ[ENV_TIMEOUT])
        else:
            timeout = DEFAULT_TIMEOUT

        log_level = (parsed.log_level or os.environ.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()

        return cls(
            api_key=api_key,
            api_secret=api_secret,
            customer_id=customer_id,
            endpoint=endpoint,
            payment_endpoint=payment_endpoint,
            timeout=timeout,
            log_level=log_level,
            credentials_required=require_credentials,
        )

    @classmethod
    def from_args(cls, args: Sequence[str] | None = None) -> Config:
        """
        Create a Config from command-line arguments only.

        Args:
            args: Command-line arguments to parse. If None, uses sys.argv[1:].

        Returns:
            Config: A fully populated configuration object.
        """
        parser = argparse.ArgumentParser(prog="wordy", add_help=False)
        cls.add_arguments(parser)
        parsed, _ = parser.parse_known_args(args)
        return cls.from_namespace(parsed)
