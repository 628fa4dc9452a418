"""Domain and activity commands."""

import click
from lifeledger.domain.catalog import CatalogService
from lifeledger.domain.errors import DomainError
from lifeledger.cli.error_handling import handle_domain_error
from lifeledger.cli.resolution import resolve_domain_or_exit


@click.group()
def domain_group():
    """Manage productivity domains."""
    pass


@domain_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include inactive domains")
@click.pass_context
def list_domains(ctx, show_all: bool):
    """List domains with their level and multiplier."""
    db = ctx.obj["db"]
    service = CatalogService(db)

    domains = service.list_domains(active_only=not show_all)
    if not domains:
        click.echo("No domains found.")
        return

    click.echo("\nDomains:")
    click.echo("-" * 80)
    for d in domains:
        status = "" if d.is_active else "  (inactive)"
        click.echo(
            f"ID: {d.id:3d} | {d.name:20s} | {d.base_rate:g} pts/h | "
            f"Level {d.level:2d} x{d.multiplier:.2f} | {d.lifetime_minutes / 60:.1f}h{status}"
        )


@domain_group.command("activities")
@click.argument("domain", required=False, metavar="DOMAIN")
@click.option("--all", "show_all", is_flag=True, help="Include inactive activities")
@click.pass_context
def list_activities(ctx, domain: str | None, show_all: bool):
    """List activities, optionally for one domain.

    DOMAIN can be a domain name or ID.
    """
    db = ctx.obj["db"]
    service = CatalogService(db)

    domain_id = resolve_domain_or_exit(ctx, db, domain) if domain is not None else None
    activities = service.list_activities(domain_id=domain_id, active_only=not show_all)
    if not activities:
        click.echo("No activities found.")
        return

    domain_names = {d.id: d.name for d in service.list_domains()}
    click.echo("\nActivities:")
    click.echo("-" * 80)
    for a in activities:
        tags = f" [{', '.join(a.tags)}]" if a.tags else ""
        status = "" if a.is_active else "  (inactive)"
        click.echo(f"ID: {a.id:3d} | {domain_names.get(a.domain_id, 'Unknown'):15s} | {a.name}{tags}{status}")


def _set_active(ctx, target: str, activity: bool, is_active: bool) -> None:
    db = ctx.obj["db"]
    service = CatalogService(db)
    verb = "Activated" if is_active else "Deactivated"

    try:
        if activity:
            try:
                activity_id = int(target)
            except ValueError:
                click.echo(f"Error: Activity must be given by ID, got '{target}'", err=True)
                ctx.exit(1)
            service.set_activity_active(activity_id, is_active)
            click.echo(f"{verb} activity {activity_id}")
        else:
            domain_id = resolve_domain_or_exit(ctx, db, target)
            service.set_domain_active(domain_id, is_active)
            click.echo(f"{verb} domain '{service.get_domain(domain_id).name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@domain_group.command("activate")
@click.argument("target", metavar="DOMAIN")
@click.option("--activity", is_flag=True, help="Treat DOMAIN as an activity ID")
@click.pass_context
def activate(ctx, target: str, activity: bool):
    """Activate a domain (or, with --activity, an activity).

    Examples:
        lifeledger domain activate Education
        lifeledger domain activate 12 --activity
    """
    _set_active(ctx, target, activity, True)


@domain_group.command("deactivate")
@click.argument("target", metavar="DOMAIN")
@click.option("--activity", is_flag=True, help="Treat DOMAIN as an activity ID")
@click.pass_context
def deactivate(ctx, target: str, activity: bool):
    """Deactivate a domain (or, with --activity, an activity).

    Inactive domains keep their history and lifetime progress.
    """
    _set_active(ctx, target, activity, False)


def register_commands(cli):
    """Register domain commands with main CLI."""
    cli.add_command(domain_group, name="domain")
