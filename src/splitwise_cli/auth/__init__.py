"""
Authentication Package

OAuth 1.0a login against Splitwise and the local cache for the resulting
access token.

Main Components:
- AccessToken: token/secret pair issued to this consumer
- TokenStore: single-file token cache with absent/corrupt detection
- CallbackListener: one-shot local HTTP listener for the provider redirect
- OAuthHandshake: request token, browser approval, access token exchange
- ensure_access_token: cache lookup falling back to the handshake
"""

from .callback import CallbackListener, CallbackResult
from .handshake import HandshakeState, OAuthHandshake, ensure_access_token
from .models import AccessToken, TokenLookup, TokenStatus
from .token_store import TokenStore

__all__ = [
    "AccessToken",
    "CallbackListener",
    "CallbackResult",
    "HandshakeState",
    "OAuthHandshake",
    "TokenLookup",
    "TokenStatus",
    "TokenStore",
    "ensure_access_token",
]
