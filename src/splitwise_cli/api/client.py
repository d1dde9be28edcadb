#!/usr/bin/env python3
"""
Splitwise API Client

Thin wrapper over OAuth1Session for the three endpoints the CLI uses. Every
request is signed with HMAC-SHA1 over the consumer secret and token secret;
every response goes through the same status check.
"""

import logging
from collections.abc import Callable
from typing import Any

import requests
from requests_oauthlib import OAuth1Session

from ..auth.models import AccessToken
from ..core.config import SplitwiseConfig
from ..core.errors import ApiError, TransportError
from .models import Expense, ExpenseRequest, Group

logger = logging.getLogger(__name__)


class SplitwiseClient:
    """
    Signed client for the Splitwise v3.0 API.

    Args:
        config: API endpoints, consumer credentials and timeout
        token: Access token of the signed-in user
        session_factory: Builds the signing session (injectable for tests)
    """

    def __init__(
        self,
        config: SplitwiseConfig,
        token: AccessToken,
        session_factory: Callable[..., OAuth1Session] = OAuth1Session,
    ):
        self.config = config
        self.session = session_factory(
            config.consumer_key,
            client_secret=config.consumer_secret,
            resource_owner_key=token.token,
            resource_owner_secret=token.secret,
        )

    def _request(self, method: str, endpoint: str, data: dict[str, str] | None = None) -> requests.Response:
        url = self.config.base_url + endpoint
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, data=data, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {endpoint} failed: {e}") from e

        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    @staticmethod
    def _check_status(response: requests.Response, endpoint: str) -> None:
        if not 200 <= response.status_code < 300:
            raise ApiError(f"Unexpected status code for {endpoint}", status_code=response.status_code, body=response.text)

    @staticmethod
    def _decode(response: requests.Response, endpoint: str) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON from {endpoint}", status_code=response.status_code, body=response.text) from e
        if not isinstance(payload, dict):
            raise ApiError(f"Unexpected JSON from {endpoint}", status_code=response.status_code, body=response.text)
        return payload

    def test(self) -> None:
        """
        Check that the consumer credentials and access token are accepted.

        Raises:
            ApiError: If the endpoint does not answer 200
            TransportError: If the request fails
        """
        response = self._request("GET", "test")
        if response.status_code != 200:
            raise ApiError("Unexpected status code for test", status_code=response.status_code)

    def get_groups_payload(self) -> dict[str, Any]:
        """Fetch the raw get_groups JSON document."""
        response = self._request("GET", "get_groups")
        self._check_status(response, "get_groups")
        return self._decode(response, "get_groups")

    def get_groups(self) -> list[Group]:
        """
        List the user's groups.

        Returns:
            Groups in API order, each with its members and balances
        """
        payload = self.get_groups_payload()
        try:
            return [Group.from_dict(g) for g in payload.get("groups") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"Malformed group in get_groups response: {e}") from e

    def create_expense(self, request: ExpenseRequest) -> list[Expense]:
        """
        Create an expense in a group.

        Args:
            request: Group, cost, description and payment flag

        Returns:
            Expenses created by the server (normally exactly one)

        Raises:
            ApiError: On a non-2xx status or when the server reports validation errors
        """
        response = self._request("POST", "create_expense", data=request.to_params())
        self._check_status(response, "create_expense")
        payload = self._decode(response, "create_expense")

        errors = payload.get("errors")
        if errors:
            raise ApiError(f"Expense was not created: {_format_errors(errors)}")

        try:
            return [Expense.from_dict(e) for e in payload.get("expenses") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise ApiError(f"Malformed expense in create_expense response: {e}") from e


def _format_errors(errors: Any) -> str:
    """Flatten Splitwise's {"field": ["message", ...]} error object."""
    if isinstance(errors, dict):
        parts = []
        for key, messages in errors.items():
            if isinstance(messages, list):
                messages = ", ".join(str(m) for m in messages)
            parts.append(messages if key == "base" else f"{key}: {messages}")
        return "; ".join(parts)
    if isinstance(errors, list):
        return "; ".join(str(e) for e in errors)
    return str(errors)
