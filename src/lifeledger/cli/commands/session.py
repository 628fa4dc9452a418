"""Session logging commands."""

import click
from lifeledger.domain.catalog import CatalogService
from lifeledger.domain.entities import SessionSource
from lifeledger.domain.session import SessionAccountant
from lifeledger.utils.date_parser import day_bounds, parse_date, parse_datetime
from lifeledger.utils.duration_parser import parse_duration
from lifeledger.cli.error_handling import report_result
from lifeledger.cli.resolution import resolve_activity_or_exit, resolve_domain_or_exit


@click.group()
def session_group():
    """Log and view work sessions."""
    pass


@session_group.command("log")
@click.argument("domain", metavar="DOMAIN")
@click.argument("duration", metavar="DURATION")
@click.option("--activity", help="Activity name or ID within the domain")
@click.option("--start", help="Start time (e.g. '18:30' or '2024-01-15 18:30'); defaults to ending now")
@click.option("--notes", help="Notes")
@click.pass_context
def log_session(ctx, domain: str, duration: str, activity: str | None, start: str | None, notes: str | None):
    """Log a session manually.

    DOMAIN can be a domain name or ID. DURATION accepts minutes ("45"),
    "45m", "1.5h", "1h30m" or "1:30". Manual sessions are flagged for review.

    Examples:
        lifeledger session log Education 90
        lifeledger session log Business 1h30m --activity "Client calls"
        lifeledger session log 3 45m --start 07:00 --notes "Morning run"
    """
    db = ctx.obj["db"]
    accountant = SessionAccountant(db)

    domain_id = resolve_domain_or_exit(ctx, db, domain)
    activity_id = resolve_activity_or_exit(ctx, db, domain_id, activity) if activity else None

    try:
        minutes = parse_duration(duration)
    except ValueError as e:
        click.echo(f"Error: Invalid duration: {e}", err=True)
        ctx.exit(1)

    start_time = None
    if start:
        try:
            start_time = parse_datetime(start)
        except ValueError as e:
            click.echo(f"Error: Invalid start time: {e}", err=True)
            ctx.exit(1)

    result = accountant.record_session(
        domain_id=domain_id,
        duration_minutes=minutes,
        source=SessionSource.MANUAL,
        start_time=start_time,
        activity_id=activity_id,
        notes=notes,
    )
    report_result(ctx, result)


@session_group.command("list")
@click.option("--date", "day", help="Only sessions started on this day (YYYY-MM-DD or 'today', 'yesterday')")
@click.option("--domain", help="Domain name or ID")
@click.option("--limit", type=int, default=20, show_default=True, help="Maximum number of sessions")
@click.pass_context
def list_sessions(ctx, day: str | None, domain: str | None, limit: int):
    """List sessions, newest first. Manual sessions are marked with *."""
    db = ctx.obj["db"]
    accountant = SessionAccountant(db)
    catalog = CatalogService(db)

    start = end = None
    if day:
        try:
            start, end = day_bounds(parse_date(day))
        except ValueError as e:
            click.echo(f"Error: Invalid date: {e}", err=True)
            ctx.exit(1)

    domain_id = resolve_domain_or_exit(ctx, db, domain) if domain else None

    sessions = accountant.list_sessions(start=start, end=end, domain_id=domain_id, limit=limit)
    if not sessions:
        click.echo("No sessions found.")
        return

    domain_names = {d.id: d.name for d in catalog.list_domains()}
    click.echo(f"\nFound {len(sessions)} session(s):")
    click.echo("-" * 80)
    for s in sessions:
        review = "*" if s.review_flag else " "
        click.echo(
            f"ID: {s.id:4d} |{review}{s.start_time:%Y-%m-%d %H:%M} | {s.duration_minutes:4d} min | "
            f"{domain_names.get(s.domain_id, 'Unknown'):15s} | {s.points_awarded:>7,} pts"
        )
        if s.notes:
            click.echo(f"           {s.notes}")


def register_commands(cli):
    """Register session commands with main CLI."""
    cli.add_command(session_group, name="session")
