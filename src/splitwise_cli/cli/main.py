#!/usr/bin/env python3
"""
Main CLI Entry Point for the Splitwise CLI

Parses global options, builds the Config for this invocation and dispatches
to the subcommands.
"""


import click

from ..core.config import Config

# Commands that work without consumer credentials
CREDENTIAL_FREE_COMMANDS = {"version", "config", "logout", "status"}


@click.group()
@click.option(
    "--consumer-key",
    help="Contains the consumer key. Environment variable SPLITWISE_CONSUMER_KEY can be used instead.",
)
@click.option(
    "--consumer-secret",
    help="Contains the consumer secret. Environment variable SPLITWISE_CONSUMER_SECRET can be used instead.",
)
@click.option(
    "--token-file",
    type=click.Path(dir_okay=False),
    help="Where the access token is cached (default: $SPLITWISE_DATA_DIR/access_token.json)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    consumer_key: str | None,
    consumer_secret: str | None,
    token_file: str | None,
    verbose: bool,
    debug: bool,
) -> None:
    """
    Splitwise CLI - Command-line access to your Splitwise account

    Signs in with OAuth 1.0a on first use, caches the access token locally,
    and lists groups or creates expenses on your behalf.
    """
    ctx.ensure_object(dict)

    try:
        config = Config.from_environment()
    except ValueError as e:
        raise click.UsageError(f"Invalid environment configuration: {e}") from e

    config = config.with_overrides(
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        token_file=token_file,
        debug=debug,
    )
    config.setup_logging()

    errors = config.validate(require_credentials=ctx.invoked_subcommand not in CREDENTIAL_FREE_COMMANDS)
    if errors:
        raise click.UsageError("; ".join(errors))

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}", err=True)
        click.echo(f"Token file: {config.token_file}", err=True)


@main.command()
def version() -> None:
    """Show version information."""
    from splitwise_cli import __author__, __version__

    click.echo(f"Splitwise CLI v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration (secrets redacted)."""
    settings = ctx.obj["config"].to_dict()

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {settings['environment']}")
    click.echo(f"  Data Directory: {settings['data_dir']}")
    click.echo(f"  Token File: {settings['token_file']}")
    for key, value in settings["splitwise"].items():
        click.echo(f"  {key.replace('_', ' ').title()}: {value if value is not None else '(not set)'}")
    click.echo(f"  Debug Mode: {settings['debug']}")
    click.echo(f"  Log Level: {settings['log_level']}")


# Import subcommands
from .account import login, logout, status  # noqa: E402
from .expenses import add, groups, test_command  # noqa: E402

for command in (test_command, groups, add, login, logout, status):
    main.add_command(command)


if __name__ == "__main__":
    main()
