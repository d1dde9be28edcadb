#!/usr/bin/env python3
"""
Configuration Management for the Splitwise CLI

Handles environment-based configuration with secure defaults and validation.
Consumer credentials, API endpoints, the callback listener and the token file
location are resolved once into a Config object that is passed explicitly to
every component.
"""

import logging
import os
import tempfile
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://secure.splitwise.com/api/v3.0/"
DEFAULT_AUTHORIZE_URL = "https://secure.splitwise.com/authorize"
DEFAULT_CALLBACK_PORT = 1234
TOKEN_FILENAME = "access_token.json"


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class SplitwiseConfig:
    """Splitwise API and OAuth configuration."""

    consumer_key: str | None = None
    consumer_secret: str | None = None
    base_url: str = DEFAULT_BASE_URL
    authorize_url: str = DEFAULT_AUTHORIZE_URL
    callback_host: str = "localhost"
    callback_port: int = DEFAULT_CALLBACK_PORT
    callback_timeout: float | None = None  # None waits for the browser indefinitely
    timeout: int = 30

    @property
    def request_token_url(self) -> str:
        return self.base_url + "get_request_token"

    @property
    def access_token_url(self) -> str:
        return self.base_url + "get_access_token"

    @property
    def callback_url(self) -> str:
        return f"http://{self.callback_host}:{self.callback_port}/"


@dataclass
class Config:
    """
    Main configuration class for the Splitwise CLI.

    Loads configuration from environment variables with secure defaults.
    Command-line flags are applied on top through with_overrides().
    """

    environment: Environment
    data_dir: Path
    token_file: Path
    splitwise: SplitwiseConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("SPLITWISE_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_splitwise_cli"
            data_dir = Path(os.getenv("SPLITWISE_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("SPLITWISE_DATA_DIR", "~/.splitwise-cli")).expanduser().resolve()

        token_file_env = os.getenv("SPLITWISE_TOKEN_FILE")
        token_file = Path(token_file_env).expanduser() if token_file_env else data_dir / TOKEN_FILENAME

        callback_timeout = os.getenv("SPLITWISE_CALLBACK_TIMEOUT")

        splitwise = SplitwiseConfig(
            consumer_key=os.getenv("SPLITWISE_CONSUMER_KEY") or None,
            consumer_secret=os.getenv("SPLITWISE_CONSUMER_SECRET") or None,
            base_url=_with_trailing_slash(os.getenv("SPLITWISE_BASE_URL", DEFAULT_BASE_URL)),
            authorize_url=os.getenv("SPLITWISE_AUTHORIZE_URL", DEFAULT_AUTHORIZE_URL),
            callback_port=int(os.getenv("SPLITWISE_CALLBACK_PORT", str(DEFAULT_CALLBACK_PORT))),
            callback_timeout=float(callback_timeout) if callback_timeout else None,
            timeout=int(os.getenv("SPLITWISE_TIMEOUT", "30")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            token_file=token_file,
            splitwise=splitwise,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def with_overrides(
        self,
        consumer_key: str | None = None,
        consumer_secret: str | None = None,
        token_file: str | Path | None = None,
        debug: bool = False,
    ) -> "Config":
        """
        Return a copy with command-line values applied over the environment.

        Args:
            consumer_key: Consumer key from --consumer-key
            consumer_secret: Consumer secret from --consumer-secret
            token_file: Token file from --token-file
            debug: True when --debug was given

        Returns:
            New Config; the receiver is left unchanged
        """
        splitwise = replace(
            self.splitwise,
            consumer_key=consumer_key or self.splitwise.consumer_key,
            consumer_secret=consumer_secret or self.splitwise.consumer_secret,
        )
        result = replace(self, splitwise=splitwise)
        if token_file:
            result.token_file = Path(token_file).expanduser()
        if debug:
            result.debug = True
            result.log_level = "DEBUG"
        return result

    def validate(self, require_credentials: bool = True) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if require_credentials:
            if not self.splitwise.consumer_key:
                errors.append("consumer key is required (--consumer-key or SPLITWISE_CONSUMER_KEY)")
            if not self.splitwise.consumer_secret:
                errors.append("consumer secret is required (--consumer-secret or SPLITWISE_CONSUMER_SECRET)")

        if self.splitwise.callback_port <= 0 or self.splitwise.callback_port > 65535:
            errors.append("Callback port must be 1-65535")
        if self.splitwise.timeout <= 0:
            errors.append("HTTP timeout must be positive")
        if self.splitwise.callback_timeout is not None and self.splitwise.callback_timeout <= 0:
            errors.append("Callback timeout must be positive")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")
        logging.getLogger("splitwise_cli").setLevel(level)

        # OAuth libraries log signature base strings at DEBUG
        if level > logging.DEBUG:
            for noisy in ("urllib3", "requests_oauthlib", "oauthlib"):
                logging.getLogger(noisy).setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "splitwise.consumer_key",
            "splitwise.consumer_secret",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if isinstance(field_value, SplitwiseConfig):
                nested: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"
                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested[nested_name] = "***REDACTED***" if nested_value else None
                    else:
                        nested[nested_name] = nested_value
                result[field_name] = nested
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _with_trailing_slash(url: str) -> str:
    """Endpoint names are appended directly to the base URL."""
    return url if url.endswith("/") else url + "/"

