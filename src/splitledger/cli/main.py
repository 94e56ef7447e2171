"""Main CLI entry point."""

import click

from splitledger.config import LOG_FORMATS, load_config
from splitledger.database.factories import create_sqlite_store
from splitledger.logging_config import configure_logging

# Import and register all commands at module level
from splitledger.cli.commands import (
    add,
    transaction,
    summary,
    settings,
    credits,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPLITLEDGER_DB_PATH environment variable)",
    envvar="SPLITLEDGER_DB_PATH",
)
@click.option(
    "--owner",
    help="Ledger owner (overrides SPLITLEDGER_OWNER environment variable)",
    envvar="SPLITLEDGER_OWNER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides SPLITLEDGER_LOG_LEVEL environment variable)",
    envvar="SPLITLEDGER_LOG_LEVEL",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS, case_sensitive=False),
    help="Log output format (overrides SPLITLEDGER_LOG_FORMAT environment variable)",
    envvar="SPLITLEDGER_LOG_FORMAT",
)
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    owner: str | None,
    log_level: str | None,
    log_format: str | None,
):
    """Splitledger - capital and profit bookkeeping.

    Record sales, purchases and expenses. Every sale is split into capital
    and profit by the configured percentage, and the running totals are kept
    in sync with the ledger.
    """
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    log_format = (log_format or config.log_format).lower()
    configure_logging(log_level or config.log_level, json=log_format == "json")
    ctx.obj["owner_id"] = owner or config.owner_id

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path, config=config)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
add.register_commands(cli)
transaction.register_commands(cli)
summary.register_commands(cli)
settings.register_commands(cli)
credits.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
