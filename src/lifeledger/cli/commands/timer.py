"""Session timer commands."""

import click
from lifeledger.domain.errors import DomainError
from lifeledger.domain.timer import SessionTimer
from lifeledger.utils.date_parser import local_now
from lifeledger.cli.error_handling import handle_domain_error, report_result
from lifeledger.cli.resolution import resolve_activity_or_exit, resolve_domain_or_exit


def format_elapsed(seconds: int) -> str:
    """Format seconds as H:MM:SS."""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"


@click.group()
def timer_group():
    """Time a session as you work."""
    pass


@timer_group.command("start")
@click.argument("domain", metavar="DOMAIN")
@click.option("--activity", help="Activity name or ID within the domain")
@click.pass_context
def start_timer(ctx, domain: str, activity: str | None):
    """Start the timer for a domain.

    Examples:
        lifeledger timer start Education
        lifeledger timer start Business --activity "Deep work"
    """
    db = ctx.obj["db"]
    timer = SessionTimer(db)

    domain_id = resolve_domain_or_exit(ctx, db, domain)
    activity_id = resolve_activity_or_exit(ctx, db, domain_id, activity) if activity else None

    try:
        started = timer.start(domain_id, activity_id=activity_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Timer started for '{db.get_domain(domain_id).name}' at {started.started_at:%H:%M}")


@timer_group.command("pause")
@click.pass_context
def pause_timer(ctx):
    """Pause the running timer."""
    try:
        paused = SessionTimer(ctx.obj["db"]).pause()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Timer paused at {format_elapsed(paused.elapsed_seconds(paused.paused_at))}")


@timer_group.command("resume")
@click.pass_context
def resume_timer(ctx):
    """Resume a paused timer."""
    try:
        SessionTimer(ctx.obj["db"]).resume()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo("Timer resumed")


@timer_group.command("status")
@click.pass_context
def timer_status(ctx):
    """Show the active timer."""
    db = ctx.obj["db"]
    active = SessionTimer(db).status()
    if active is None:
        click.echo("No timer is active.")
        return

    domain = db.get_domain(active.domain_id)
    name = domain.name if domain else f"Domain {active.domain_id}"
    if active.activity_id is not None:
        activity = db.get_activity(active.activity_id)
        if activity is not None:
            name = f"{name} - {activity.name}"

    state = "paused" if active.is_paused else "running"
    click.echo(f"{name}: {format_elapsed(active.elapsed_seconds(local_now()))} ({state})")
    click.echo(f"Started at {active.started_at:%Y-%m-%d %H:%M}")


@timer_group.command("finish")
@click.option("--notes", help="Notes for the session")
@click.pass_context
def finish_timer(ctx, notes: str | None):
    """Stop the timer and record the session.

    If the session is rejected (for example by the daily hard cap) the
    timer is kept; use 'timer cancel' to discard it.
    """
    result = SessionTimer(ctx.obj["db"]).finish(notes=notes)
    report_result(ctx, result)


@timer_group.command("cancel")
@click.pass_context
def cancel_timer(ctx):
    """Discard the active timer without recording anything."""
    try:
        SessionTimer(ctx.obj["db"]).cancel()
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo("Timer cancelled")


def register_commands(cli):
    """Register timer commands with main CLI."""
    cli.add_command(timer_group, name="timer")
