#!/usr/bin/env python3
"""
Account CLI - Login State Management

Commands for the cached OAuth access token, plus the authenticate() helper
used by every command that talks to the API.
"""

import click

from ..auth.handshake import OAuthHandshake, ensure_access_token
from ..auth.models import AccessToken, TokenStatus
from ..auth.token_store import TokenStore
from ..core.config import Config
from ..core.errors import SplitwiseError


def authenticate(config: Config, force: bool = False) -> AccessToken:
    """
    Get an access token for this invocation.

    Uses the cached token when there is a valid one; otherwise runs the
    browser login and caches the result.

    Raises:
        click.ClickException: If login fails or the token cannot be saved
    """
    store = TokenStore(config.token_file)
    handshake = OAuthHandshake(config.splitwise)

    try:
        return ensure_access_token(store, handshake, force=force)
    except SplitwiseError as e:
        raise click.ClickException(f"Failed to authenticate: {e}") from e
    except OSError as e:
        raise click.ClickException(f"Cannot save access token to {config.token_file}: {e}") from e


@click.command()
@click.pass_context
def login(ctx: click.Context) -> None:
    """
    Sign in through the browser and cache a fresh access token.

    Replaces any token already cached.

    Example:
      splitwise login
    """
    config: Config = ctx.obj["config"]
    authenticate(config, force=True)
    click.echo(f"Logged in. Access token saved to {config.token_file}")


@click.command()
@click.pass_context
def logout(ctx: click.Context) -> None:
    """Delete the cached access token."""
    config: Config = ctx.obj["config"]
    store = TokenStore(config.token_file)

    try:
        removed = store.clear()
    except OSError as e:
        raise click.ClickException(f"Cannot remove {config.token_file}: {e}") from e

    if removed:
        click.echo(f"Removed cached token {config.token_file}")
    else:
        click.echo("No cached token to remove")


@click.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show whether a usable access token is cached."""
    config: Config = ctx.obj["config"]
    store = TokenStore(config.token_file)

    result = store.lookup()
    click.echo(store.summary_text(result))
    if result.status != TokenStatus.FOUND:
        click.echo("The next command that needs the API will open the browser to sign in.")
