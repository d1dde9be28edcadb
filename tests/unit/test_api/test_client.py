#!/usr/bin/env python3
"""
Unit tests for the Splitwise API client.
"""

import pytest
import requests

from splitwise_cli.api.client import SplitwiseClient
from splitwise_cli.api.models import ExpenseRequest
from splitwise_cli.core.errors import ApiError, TransportError
from tests.fixtures.api_responses import make_response, make_session_factory


def _client(splitwise_config, access_token, *responses):
    factory, session = make_session_factory(*responses)
    return SplitwiseClient(splitwise_config, access_token, session_factory=factory), factory, session


@pytest.mark.unit
@pytest.mark.api
class TestSplitwiseClientSigning:
    """Test that requests are signed with consumer and token credentials."""

    def test_session_built_with_all_four_credentials(self, splitwise_config, access_token):
        _, factory, _ = _client(splitwise_config, access_token)

        factory.assert_called_once_with(
            "consumer-key",
            client_secret="consumer-secret",
            resource_owner_key="access-token-123",
            resource_owner_secret="access-secret-456",
        )


@pytest.mark.unit
@pytest.mark.api
class TestConnectivityTest:
    """Test the test endpoint."""

    def test_200_succeeds(self, splitwise_config, access_token):
        client, _, session = _client(splitwise_config, access_token, make_response(200, {"token": {}}))

        client.test()

        session.request.assert_called_once_with(
            "GET", "https://secure.splitwise.com/api/v3.0/test", data=None, timeout=30
        )

    @pytest.mark.parametrize("status_code", [201, 401, 403, 500])
    def test_non_200_reports_status(self, splitwise_config, access_token, status_code):
        client, _, _ = _client(splitwise_config, access_token, make_response(status_code, text="nope"))

        with pytest.raises(ApiError) as exc_info:
            client.test()

        assert exc_info.value.status_code == status_code
        assert str(status_code) in str(exc_info.value)

    def test_network_error_is_transport_error(self, splitwise_config, access_token):
        client, _, _ = _client(splitwise_config, access_token, requests.Timeout("read timed out"))

        with pytest.raises(TransportError, match="read timed out"):
            client.test()


@pytest.mark.unit
@pytest.mark.api
class TestGetGroups:
    """Test group listing."""

    def test_decodes_groups_in_order(self, splitwise_config, access_token, sample_groups_payload):
        client, _, _ = _client(splitwise_config, access_token, make_response(200, sample_groups_payload))

        groups = client.get_groups()

        assert [g.name for g in groups] == ["Non-group expenses", "Flat 3B"]
        flat = groups[1]
        assert flat.id == 4821
        assert [m.id for m in flat.members] == [101, 102, 103]
        assert flat.members[1].balances[1].currency_code == "USD"

    def test_raw_payload(self, splitwise_config, access_token, sample_groups_payload):
        client, _, _ = _client(splitwise_config, access_token, make_response(200, sample_groups_payload))

        assert client.get_groups_payload() == sample_groups_payload

    def test_empty_group_list(self, splitwise_config, access_token):
        client, _, _ = _client(splitwise_config, access_token, make_response(200, {"groups": []}))

        assert client.get_groups() == []

    def test_error_status(self, splitwise_config, access_token):
        client, _, _ = _client(
            splitwise_config, access_token, make_response(401, {"error": "Invalid API Request: you are not logged in"})
        )

        with pytest.raises(ApiError, match="not logged in") as exc_info:
            client.get_groups()

        assert exc_info.value.status_code == 401

    def test_invalid_json(self, splitwise_config, access_token):
        client, _, _ = _client(splitwise_config, access_token, make_response(200, text="<html>maintenance</html>"))

        with pytest.raises(ApiError, match="Invalid JSON"):
            client.get_groups()

    def test_malformed_group(self, splitwise_config, access_token):
        client, _, _ = _client(splitwise_config, access_token, make_response(200, {"groups": [{"name": "no id"}]}))

        with pytest.raises(ApiError, match="Malformed group"):
            client.get_groups()


@pytest.mark.unit
@pytest.mark.api
class TestCreateExpense:
    """Test expense creation."""

    def test_posts_form_parameters(self, splitwise_config, access_token, sample_expense_payload):
        client, _, session = _client(splitwise_config, access_token, make_response(200, sample_expense_payload))
        request = ExpenseRequest(group_id=4821, cost="42.00", description="Groceries")

        expenses = client.create_expense(request)

        session.request.assert_called_once_with(
            "POST",
            "https://secure.splitwise.com/api/v3.0/create_expense",
            data={"group_id": "4821", "cost": "42.00", "description": "Groceries", "payment": "0"},
            timeout=30,
        )
        assert len(expenses) == 1
        assert expenses[0].id == 900001
        assert expenses[0].group_id == 4821

    def test_server_validation_errors(self, splitwise_config, access_token):
        payload = {"expenses": [], "errors": {"base": ["You cannot add an expense to this group"], "cost": ["is invalid"]}}
        client, _, _ = _client(splitwise_config, access_token, make_response(200, payload))

        with pytest.raises(ApiError) as exc_info:
            client.create_expense(ExpenseRequest(group_id=1, cost="x", description="d"))

        message = str(exc_info.value)
        assert "You cannot add an expense to this group" in message
        assert "cost: is invalid" in message

    def test_error_status(self, splitwise_config, access_token):
        client, _, _ = _client(splitwise_config, access_token, make_response(500, text="Internal Server Error"))

        with pytest.raises(ApiError) as exc_info:
            client.create_expense(ExpenseRequest(group_id=1, cost="1", description="d"))

        assert exc_info.value.status_code == 500

    def test_custom_base_url(self, splitwise_config, access_token, sample_expense_payload):
        splitwise_config.base_url = "http://localhost:9000/api/"
        client, _, session = _client(splitwise_config, access_token, make_response(200, sample_expense_payload))

        client.create_expense(ExpenseRequest(group_id=1, cost="1", description="d"))

        assert session.request.call_args.args[1] == "http://localhost:9000/api/create_expense"
