"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path
from typing import Any

import pytest

from splitwise_cli.auth.models import AccessToken
from splitwise_cli.auth.token_store import TokenStore
from splitwise_cli.core.config import Config, Environment, SplitwiseConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def access_token() -> AccessToken:
    """Access token as issued by the token exchange."""
    return AccessToken(token="access-token-123", secret="access-secret-456")


@pytest.fixture
def token_store(temp_dir) -> TokenStore:
    """Token store backed by a file in the temp directory."""
    return TokenStore(temp_dir / "access_token.json")


@pytest.fixture
def splitwise_config() -> SplitwiseConfig:
    """API configuration with test consumer credentials."""
    return SplitwiseConfig(
        consumer_key="consumer-key",
        consumer_secret="consumer-secret",
        callback_host="127.0.0.1",
    )


@pytest.fixture
def config(temp_dir, splitwise_config) -> Config:
    """Complete configuration rooted in the temp directory."""
    return Config(
        environment=Environment.TEST,
        data_dir=temp_dir,
        token_file=temp_dir / "access_token.json",
        splitwise=splitwise_config,
    )


@pytest.fixture
def sample_groups_payload() -> dict[str, Any]:
    """get_groups response with one settled and one unsettled member."""
    return {
        "groups": [
            {
                "id": 0,
                "name": "Non-group expenses",
                "members": [],
            },
            {
                "id": 4821,
                "name": "Flat 3B",
                "members": [
                    {
                        "id": 101,
                        "first_name": "Ana",
                        "last_name": "Lima",
                        "balance": [{"amount": "12.50", "currency_code": "EUR"}],
                    },
                    {
                        "id": 102,
                        "first_name": "Tom",
                        "last_name": None,
                        "balance": [
                            {"amount": "-12.50", "currency_code": "EUR"},
                            {"amount": "3.00", "currency_code": "USD"},
                        ],
                    },
                    {
                        "id": 103,
                        "first_name": "Kai",
                        "last_name": "Berg",
                        "balance": [],
                    },
                ],
            },
        ]
    }


@pytest.fixture
def sample_expense_payload() -> dict[str, Any]:
    """create_expense response for a successful request."""
    return {
        "expenses": [
            {
                "id": 900001,
                "group_id": 4821,
                "description": "Groceries",
                "cost": "42.0",
                "currency_code": "EUR",
                "payment": False,
            }
        ],
        "errors": {},
    }


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, temp_dir):
    """Set up test environment variables."""
    # Ensure tests never touch a real token cache
    monkeypatch.setenv("SPLITWISE_ENV", "test")
    monkeypatch.setenv("SPLITWISE_DATA_DIR", str(temp_dir))

    for name in (
        "SPLITWISE_CONSUMER_KEY",
        "SPLITWISE_CONSUMER_SECRET",
        "SPLITWISE_TOKEN_FILE",
        "SPLITWISE_BASE_URL",
        "SPLITWISE_CALLBACK_PORT",
        "SPLITWISE_CALLBACK_TIMEOUT",
        "SPLITWISE_TIMEOUT",
        "LOG_LEVEL",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def credentials_env(monkeypatch):
    """Provide consumer credentials through the environment."""
    monkeypatch.setenv("SPLITWISE_CONSUMER_KEY", "env-consumer-key")
    monkeypatch.setenv("SPLITWISE_CONSUMER_SECRET", "env-consumer-secret")


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for complete workflows"
    )
    config.addinivalue_line(
        "markers", "auth: Tests for the OAuth handshake and token cache"
    )
    config.addinivalue_line(
        "markers", "api: Tests for the Splitwise API client"
    )
    config.addinivalue_line(
        "markers", "cli: Tests for the command-line interface"
    )
