"""Progress command."""

import click
from lifeledger.domain.progress import ProgressService


def progress_bar(percentage: float, width: int = 20) -> str:
    filled = int(round(percentage / 100 * width))
    return "#" * filled + "." * (width - filled)


@click.command("progress")
@click.pass_context
def progress(ctx):
    """Show level progress per domain and today's totals."""
    service = ProgressService(ctx.obj["db"])

    today = service.today()
    click.echo(
        f"\nToday: {today.minutes} min logged, {today.points_earned:,} points earned, "
        f"{today.remaining_minutes} min left before the daily cap"
    )

    totals = service.totals()
    click.echo(
        f"Total: {totals.total_hours:.1f}h | {totals.total_levels} levels | "
        f"average multiplier x{totals.average_multiplier:.2f}"
    )

    click.echo("\nDomains:")
    click.echo("-" * 80)
    for item in service.domain_progress():
        p = item.progress
        if p.is_max_level:
            detail = "max level"
        else:
            detail = f"{p.hours_to_next_level:.1f}h to level {p.level + 1}"
        click.echo(
            f"{item.domain.name:15s} | Level {p.level:2d} x{p.multiplier:.2f} | "
            f"[{progress_bar(p.percentage)}] {p.percentage:5.1f}% | {p.hours:.1f}h, {detail}"
        )


def register_commands(cli):
    """Register progress command with main CLI."""
    cli.add_command(progress)
