"""Main CLI entry point."""

import logging

import click
from lifeledger.database.factories import create_sqlite_database
from lifeledger.domain.catalog import CatalogService

# Import and register all commands at module level
from lifeledger.cli.commands import (
    domain,
    session,
    timer,
    shop,
    bonus,
    ledger,
    progress,
    config,
    backup,
    check,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LIFELEDGER_DB_PATH environment variable)",
    envvar="LIFELEDGER_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every state change")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Lifeledger - Points economy for your time.

    Log time in productivity domains, earn points that grow with your level,
    and redeem them for rewards from your personal shop.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.INFO if verbose else logging.ERROR,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        CatalogService(db).ensure_initialized()
        ctx.obj["db"] = db


# Register all commands
domain.register_commands(cli)
session.register_commands(cli)
timer.register_commands(cli)
shop.register_commands(cli)
bonus.register_commands(cli)
ledger.register_commands(cli)
progress.register_commands(cli)
config.register_commands(cli)
backup.register_commands(cli)
check.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
