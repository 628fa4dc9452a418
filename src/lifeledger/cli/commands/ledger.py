"""Balance and ledger commands."""

import click
from lifeledger.domain.entities import LedgerEntryType
from lifeledger.domain.ledger import LedgerService
from lifeledger.utils.date_parser import day_bounds, get_date_range


@click.command("balance")
@click.pass_context
def balance(ctx):
    """Show the current point balance."""
    click.echo(f"Balance: {LedgerService(ctx.obj['db']).balance():,} points")


@click.group()
def ledger_group():
    """Inspect the points ledger."""
    pass


@ledger_group.command("list")
@click.option(
    "--type",
    "entry_type",
    type=click.Choice([t.value for t in LedgerEntryType]),
    help="Only entries of this type",
)
@click.option(
    "--period",
    type=click.Choice(["today", "this-week", "last-week", "this-month", "last-month"]),
    help="Only entries in this period",
)
@click.option("--limit", type=int, default=20, show_default=True, help="Maximum number of entries")
@click.pass_context
def list_entries(ctx, entry_type: str | None, period: str | None, limit: int):
    """List ledger entries, newest first."""
    service = LedgerService(ctx.obj["db"])

    start = end = None
    if period:
        first, last = get_date_range(period)
        start, end = day_bounds(first)[0], day_bounds(last)[1]

    entries = service.list_entries(
        entry_type=LedgerEntryType(entry_type) if entry_type else None,
        start=start,
        end=end,
        limit=limit,
    )
    if not entries:
        click.echo("No ledger entries found.")
        return

    click.echo("\nLedger:")
    click.echo("-" * 80)
    for e in entries:
        click.echo(f"{e.timestamp:%Y-%m-%d %H:%M} | {e.points_delta:>+12,} | {e.type.value:12s} | {e.description}")


def register_commands(cli):
    """Register balance and ledger commands with main CLI."""
    cli.add_command(balance)
    cli.add_command(ledger_group, name="ledger")
