"""Consistency check command."""

import click
from lifeledger.domain.consistency import ConsistencyService


@click.command("check")
@click.option("--repair", is_flag=True, help="Drop orphaned records and dangling ledger entries")
@click.pass_context
def check(ctx, repair: bool):
    """Check that every record has its ledger entry and vice versa."""
    service = ConsistencyService(ctx.obj["db"])
    report = service.repair() if repair else service.check()

    if report.is_consistent:
        click.echo("Ledger is consistent.")
        return

    problems = [
        ("Redemptions without a ledger entry", report.orphan_redemption_ids),
        ("Bonuses without a ledger entry", report.orphan_bonus_ids),
        ("Sessions with points but no ledger entry", report.unbooked_session_ids),
        ("Ledger entries without their record", report.dangling_entry_ids),
    ]
    for label, ids in problems:
        if ids:
            click.echo(f"{label}: {', '.join(str(i) for i in ids)}")

    if repair:
        click.echo("Repaired: orphaned redemptions, bonuses and dangling entries were dropped.")
    else:
        click.echo("Run 'lifeledger check --repair' to fix.")
        ctx.exit(1)


def register_commands(cli):
    """Register check command with main CLI."""
    cli.add_command(check)
