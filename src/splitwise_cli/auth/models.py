#!/usr/bin/env python3
"""
OAuth Credential Models

Types exchanged between the handshake, the token store and the API client.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class AccessToken:
    """
    OAuth 1.0a access token for one user of one consumer application.

    Only valid together with the consumer key/secret that requested it.
    """

    token: str
    secret: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccessToken":
        """
        Create AccessToken from a stored record.

        Raises:
            ValueError: If either field is missing or not a non-empty string
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        token = data.get("token")
        secret = data.get("secret")
        if not isinstance(token, str) or not token:
            raise ValueError("Missing or invalid 'token' field")
        if not isinstance(secret, str) or not secret:
            raise ValueError("Missing or invalid 'secret' field")

        return cls(token=token, secret=secret)

    @classmethod
    def from_oauth_response(cls, data: dict[str, Any]) -> "AccessToken":
        """Create AccessToken from the oauth_token/oauth_token_secret pair."""
        try:
            return cls(token=data["oauth_token"], secret=data["oauth_token_secret"])
        except KeyError as e:
            raise ValueError(f"Token response is missing {e}") from e

    def to_dict(self) -> dict[str, str]:
        return {"token": self.token, "secret": self.secret}

    def __repr__(self) -> str:
        # Never print the secret
        return f"AccessToken(token={self.token[:4]}..., secret=***)"


class TokenStatus(Enum):
    """Outcome of looking up the cached access token."""

    FOUND = "found"
    ABSENT = "absent"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class TokenLookup:
    """Tagged result of a token store lookup."""

    status: TokenStatus
    token: AccessToken | None = None
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.status == TokenStatus.FOUND
