#!/usr/bin/env python3
"""
Expenses CLI - Groups and Expense Creation

Commands that call the Splitwise API on behalf of the signed-in user.
"""

import click

from ..api.client import SplitwiseClient
from ..api.models import ExpenseRequest, Group
from ..core.config import Config
from ..core.errors import SplitwiseError
from ..core.json_utils import format_json
from .account import authenticate


def _client(ctx: click.Context) -> SplitwiseClient:
    config: Config = ctx.obj["config"]
    token = authenticate(config)
    return SplitwiseClient(config.splitwise, token)


def _print_group(index: int, group: Group) -> None:
    click.echo(f"{index}. {group.name} (id {group.id})")
    for member in group.members:
        if member.is_settled():
            click.echo(f"     {member.full_name}: settled up")
            continue
        balances = ", ".join(str(b) for b in member.balances)
        click.echo(f"     {member.full_name}: {balances}")


@click.command(name="test")
@click.pass_context
def test_command(ctx: click.Context) -> None:
    """Check that the app can authenticate against Splitwise."""
    client = _client(ctx)

    try:
        client.test()
    except SplitwiseError as e:
        raise click.ClickException(f"Error authenticating: {e}") from e

    click.echo("Authenticated correctly")


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw get_groups response")
@click.pass_context
def groups(ctx: click.Context, as_json: bool) -> None:
    """
    List your groups with each member's balances.

    Examples:
      splitwise groups
      splitwise groups --json
    """
    client = _client(ctx)

    try:
        if as_json:
            click.echo(format_json(client.get_groups_payload()))
            return
        group_list = client.get_groups()
    except SplitwiseError as e:
        raise click.ClickException(f"Failed to request groups: {e}") from e

    if not group_list:
        click.echo("No groups found.")
        return

    try:
        for i, group in enumerate(group_list):
            _print_group(i, group)
    except ValueError as e:
        raise click.ClickException(f"Failed to display groups: {e}") from e


def _choose_group(client: SplitwiseClient) -> Group:
    """List groups on stderr and prompt for one by index."""
    group_list = client.get_groups()
    if not group_list:
        raise click.ClickException("No groups found; pass --group-id or create a group first")

    for i, group in enumerate(group_list):
        click.echo(f"{i}. {group.name}", err=True)

    index = click.prompt("Choose a group", type=click.IntRange(0, len(group_list) - 1), err=True)
    return group_list[index]


@click.command()
@click.option("--group-id", type=int, help="Group to add the expense to (prompted for when omitted)")
@click.option("--cost", required=True, help="Total cost as a decimal string, e.g. 12.50")
@click.option("--description", required=True, help="Expense description")
@click.option("--payment/--no-payment", default=False, help="Record a payment instead of an expense")
@click.option("--currency-code", help="Currency code (default: the group's currency)")
@click.pass_context
def add(
    ctx: click.Context,
    group_id: int | None,
    cost: str,
    description: str,
    payment: bool,
    currency_code: str | None,
) -> None:
    """
    Add an expense to a group.

    Without --group-id, lists your groups and asks which one to use.

    Examples:
      splitwise add --group-id 123 --cost 42.00 --description "Groceries"
      splitwise add --cost 20 --description "Settle up" --payment
    """
    client = _client(ctx)

    try:
        if group_id is None:
            group_id = _choose_group(client).id

        request = ExpenseRequest(
            group_id=group_id,
            cost=cost,
            description=description,
            payment=payment,
            currency_code=currency_code,
        )
        created = client.create_expense(request)
    except SplitwiseError as e:
        raise click.ClickException(f"Failed to create expense: {e}") from e

    if not created:
        click.echo("Expense submitted, but the server did not return it")
        return

    for expense in created:
        click.echo(f"Created expense {expense.id}: {expense.description} ({expense.cost} {expense.currency_code})")
