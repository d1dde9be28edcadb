#!/usr/bin/env python3
"""
Token Store

Single-entry cache for the OAuth access token. The token lives in one JSON
file; a missing file and an unreadable file are reported separately so that
corruption is visible instead of silently triggering a new login.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from ..core.json_utils import read_json, write_json
from .models import AccessToken, TokenLookup, TokenStatus

logger = logging.getLogger(__name__)


class TokenStore:
    """
    DataStore for the cached access token.

    Follows the exists/load/save/metadata shape used by the other stores;
    lookup() is the entry point for commands that need a token.
    """

    def __init__(self, token_file: Path):
        """
        Initialize token store.

        Args:
            token_file: JSON file holding the {token, secret} record
        """
        self.token_file = Path(token_file)

    def exists(self) -> bool:
        """Check if a token file exists."""
        return self.token_file.exists()

    def load(self) -> AccessToken:
        """
        Load the cached access token.

        Returns:
            AccessToken read from disk

        Raises:
            FileNotFoundError: If no token file exists
            ValueError: If the file cannot be read or decoded
        """
        if not self.exists():
            raise FileNotFoundError(f"Token file not found: {self.token_file}")

        try:
            data = read_json(self.token_file)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValueError(f"Cannot read token file {self.token_file}: {e}") from e

        return AccessToken.from_dict(data)

    def lookup(self) -> TokenLookup:
        """
        Look up the cached token without raising.

        Returns:
            TokenLookup tagged FOUND, ABSENT or CORRUPT
        """
        try:
            token = self.load()
        except FileNotFoundError:
            logger.info(f"No cached access token at {self.token_file}")
            return TokenLookup(status=TokenStatus.ABSENT)
        except ValueError as e:
            logger.warning(f"Ignoring corrupt token file {self.token_file}: {e}")
            return TokenLookup(status=TokenStatus.CORRUPT, error=str(e))

        logger.debug(f"Loaded cached access token from {self.token_file}")
        return TokenLookup(status=TokenStatus.FOUND, token=token)

    def save(self, token: AccessToken) -> None:
        """
        Save the access token, replacing any previous one.

        Args:
            token: Token to persist

        Raises:
            OSError: If the file cannot be written
        """
        write_json(self.token_file, token.to_dict(), private=True)
        logger.info(f"Saved access token to {self.token_file}")

    def clear(self) -> bool:
        """
        Delete the cached token.

        Returns:
            True if a file was removed, False if there was nothing to remove
        """
        if not self.exists():
            return False
        self.token_file.unlink()
        logger.info(f"Removed access token {self.token_file}")
        return True

    def last_modified(self) -> datetime | None:
        """Get timestamp of the token file."""
        if not self.exists():
            return None
        return datetime.fromtimestamp(self.token_file.stat().st_mtime)

    def age_days(self) -> int | None:
        """Get age in days of the token file."""
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days

    def summary_text(self, result: TokenLookup | None = None) -> str:
        """
        Get human-readable summary of the cached token.

        Args:
            result: An earlier lookup() to describe; looked up afresh if omitted
        """
        if result is None:
            result = self.lookup()
        if result.status == TokenStatus.ABSENT:
            return f"No cached token ({self.token_file})"
        if result.status == TokenStatus.CORRUPT:
            return f"Corrupt token file ({self.token_file}): {result.error}"

        age = self.age_days()
        age_text = "today" if age == 0 else f"{age} days ago"
        return f"Cached token saved {age_text} ({self.token_file})"
