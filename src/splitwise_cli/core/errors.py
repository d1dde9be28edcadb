#!/usr/bin/env python3
"""
Splitwise CLI Exceptions

All operational failures derive from SplitwiseError so the command layer can
report them uniformly. Usage problems are not represented here; they are
raised as click.UsageError by the CLI itself.
"""


class SplitwiseError(Exception):
    """Base class for failures of a single command invocation."""


class TransportError(SplitwiseError):
    """The request never produced an HTTP response (DNS, connection, timeout)."""


class ApiError(SplitwiseError):
    """The API answered with an unexpected status or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        message = super().__str__()
        if self.status_code is not None:
            message = f"{message} (HTTP {self.status_code})"
        if self.body:
            message = f"{message}: {_truncate(self.body)}"
        return message


class AuthenticationError(SplitwiseError):
    """The OAuth handshake could not produce an access token."""


def _truncate(text: str, limit: int = 300) -> str:
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
