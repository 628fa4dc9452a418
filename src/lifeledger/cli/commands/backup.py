"""Backup, restore and reset commands."""

import json

import click
from lifeledger.domain.backup import BackupService
from lifeledger.domain.config_import import load_config_file
from lifeledger.domain.errors import DomainError
from lifeledger.utils.date_parser import local_now
from lifeledger.cli.error_handling import handle_domain_error, report_result


@click.group()
def backup_group():
    """Export and restore all data."""
    pass


@backup_group.command("export")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file (defaults to a dated file name)")
@click.option("--stdout", "to_stdout", is_flag=True, help="Write the backup to standard output")
@click.pass_context
def export_backup(ctx, output: str | None, to_stdout: bool):
    """Export every table to a JSON backup file."""
    document = BackupService(ctx.obj["db"]).export_backup()
    text = json.dumps(document, indent=2)

    if to_stdout:
        click.echo(text)
        return

    path = output or f"lifeledger-backup-{local_now():%Y-%m-%d}.json"
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    click.echo(f"Data exported to {path}")


@backup_group.command("restore")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False), metavar="FILE")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def restore_backup(ctx, file_path: str, yes: bool):
    """Replace ALL data with the contents of a backup file."""
    try:
        document = load_config_file(file_path)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm("This will replace ALL your current data. Are you sure?"):
        click.echo("Restore cancelled.")
        return

    report_result(ctx, BackupService(ctx.obj["db"]).restore_backup(document))


@click.command("reset")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def reset(ctx, yes: bool):
    """Delete ALL data. Placeholder defaults are restored on the next run."""
    if not yes and not click.confirm("This will delete ALL your data. This cannot be undone. Are you sure?"):
        click.echo("Reset cancelled.")
        return

    BackupService(ctx.obj["db"]).reset_all_data()
    click.echo("All data has been reset.")


def register_commands(cli):
    """Register backup and reset commands with main CLI."""
    cli.add_command(backup_group, name="backup")
    cli.add_command(reset)
