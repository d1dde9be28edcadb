"""
Core Utilities Package

Configuration, error types and JSON helpers shared by the auth, api and cli
packages.
"""

from .config import (
    Config,
    Environment,
    SplitwiseConfig,
)
from .errors import (
    ApiError,
    AuthenticationError,
    SplitwiseError,
    TransportError,
)
from .json_utils import format_json, read_json, write_json

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "SplitwiseConfig",
    # Errors
    "ApiError",
    "AuthenticationError",
    "SplitwiseError",
    "TransportError",
    # JSON
    "format_json",
    "read_json",
    "write_json",
]
