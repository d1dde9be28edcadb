"""
Splitwise CLI - Command-line access to Splitwise

Signs in to the Splitwise API with the OAuth 1.0a three-legged flow, caches
the access token on local disk, and lists groups or creates expenses for the
signed-in user.

Packages:
- core: configuration, error types, JSON helpers
- auth: OAuth handshake, callback listener, token cache
- api: signed API client and response models
- cli: click command-line interface

Example Usage:
    from splitwise_cli.auth import TokenStore, OAuthHandshake, ensure_access_token
    from splitwise_cli.api import SplitwiseClient
    from splitwise_cli.core import Config

    config = Config.from_environment()
    token = ensure_access_token(TokenStore(config.token_file), OAuthHandshake(config.splitwise))
    groups = SplitwiseClient(config.splitwise, token).get_groups()
"""

__version__ = "0.1.0"
__author__ = "Splitwise CLI contributors"

from .api import ExpenseRequest, Group, SplitwiseClient
from .auth import AccessToken, OAuthHandshake, TokenStore, ensure_access_token
from .core import Config, SplitwiseError

__all__ = [
    "AccessToken",
    "Config",
    "ExpenseRequest",
    "Group",
    "OAuthHandshake",
    "SplitwiseClient",
    "SplitwiseError",
    "TokenStore",
    "ensure_access_token",
]
