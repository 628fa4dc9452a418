"""Bonus commands."""

import click
from lifeledger.domain.bonus import BonusService
from lifeledger.cli.error_handling import report_result


@click.group()
def bonus_group():
    """Award one-off bonuses."""
    pass


@bonus_group.command("add")
@click.argument("title", metavar="TITLE")
@click.argument("points", type=int, metavar="POINTS")
@click.option("--notes", help="Notes")
@click.pass_context
def add_bonus(ctx, title: str, points: int, notes: str | None):
    """Award a bonus.

    Examples:
        lifeledger bonus add "Launch a paid product" 200000
        lifeledger bonus add "Gym streak" 40000 --notes "12 weeks"
    """
    result = BonusService(ctx.obj["db"]).award_bonus(title, points, notes=notes)
    report_result(ctx, result)


@bonus_group.command("list")
@click.pass_context
def list_bonuses(ctx):
    """List awarded bonuses, newest first."""
    bonuses = BonusService(ctx.obj["db"]).list_bonuses()
    if not bonuses:
        click.echo("No bonuses awarded yet.")
        return

    click.echo("\nBonuses:")
    click.echo("-" * 80)
    for b in bonuses:
        click.echo(f"{b.timestamp:%Y-%m-%d %H:%M} | {b.title:40s} | {b.points:>10,} pts")
        if b.notes:
            click.echo(f"                 {b.notes}")


@bonus_group.command("milestones")
@click.pass_context
def milestones(ctx):
    """Show suggested bonus milestones."""
    click.echo("\nBonus milestones:")
    click.echo("-" * 80)
    for m in BonusService(ctx.obj["db"]).milestones():
        click.echo(f"{m['title']:50s} | {m['points']:>10,} pts")


def register_commands(cli):
    """Register bonus commands with main CLI."""
    cli.add_command(bonus_group, name="bonus")
