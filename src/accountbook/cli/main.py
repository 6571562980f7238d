"""Main CLI entry point."""

import click

from accountbook.config import LedgerConfig
from accountbook.database.factories import create_database, create_sqlite_database
from accountbook.logging_config import configure_logging

# Import and register all commands at module level
from accountbook.cli.commands import account, balance, user


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides ACCOUNTBOOK_DB_PATH environment variable)",
    envvar="ACCOUNTBOOK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Log level (overrides ACCOUNTBOOK_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Accountbook - Account balance ledger.

    Open and close accounts for users, use and cancel balance, and look up
    the transactions recorded against each account.
    """
    ctx.ensure_object(dict)

    # Only touch logging and the database when running a command (not --help)
    if ctx.invoked_subcommand is not None:
        config = LedgerConfig.from_env()
        configure_logging(log_level or config.log_level, json_output=config.log_json)

        if db_path:
            db = create_sqlite_database(database_path=db_path)
        else:
            db = create_database(config.resolve_database_url())
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["config"] = config
        ctx.call_on_close(db.disconnect)


# Register all commands
user.register_commands(cli)
account.register_commands(cli)
balance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
