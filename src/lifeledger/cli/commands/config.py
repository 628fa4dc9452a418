"""Personal configuration commands."""

import json

import click
from lifeledger.domain.catalog import CatalogService
from lifeledger.domain.config_import import ConfigImporter, load_config_file
from lifeledger.domain.errors import DomainError
from lifeledger.cli.error_handling import handle_domain_error, report_result


@click.group()
def config_group():
    """Import and inspect your personal configuration."""
    pass


@config_group.command("import")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False), metavar="FILE")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def import_config(ctx, file_path: str, yes: bool):
    """Replace domains, activities and shop items from a config file.

    Session history, bonuses, redemptions and the ledger are preserved.

    Examples:
        lifeledger config import my-config.json
        lifeledger config import my-config.json --yes
    """
    importer = ConfigImporter(ctx.obj["db"])

    try:
        document = load_config_file(file_path)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and isinstance(document, dict):
        domains = document.get("domains") or []
        shop_items = document.get("shopItems") or []
        click.echo("This will replace your current domains and shop items with:")
        click.echo(f"  {len(domains)} domains")
        click.echo(f"  {len(shop_items)} shop items")
        click.echo("Your session history will be preserved.")
        if not click.confirm("Continue?"):
            click.echo("Import cancelled.")
            return

    report_result(ctx, importer.import_config(document))


@config_group.command("show")
@click.pass_context
def show_config(ctx):
    """Show which configuration is active."""
    settings = CatalogService(ctx.obj["db"]).get_settings()
    if not settings.config_imported:
        click.echo("Using placeholder defaults. Import your personal config with 'lifeledger config import'.")
        return

    click.echo("Personal config imported.")
    if settings.config_version is not None:
        click.echo(f"Schema version: {settings.config_version}")
    if settings.imported_at is not None:
        click.echo(f"Imported at: {settings.imported_at:%Y-%m-%d %H:%M}")
    if settings.config_meta:
        click.echo("Meta:")
        click.echo(json.dumps(settings.config_meta, indent=2))


def register_commands(cli):
    """Register config commands with main CLI."""
    cli.add_command(config_group, name="config")
