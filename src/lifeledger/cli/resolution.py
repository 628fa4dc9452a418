"""CLI helpers for name-or-ID resolution."""

from __future__ import annotations

import click

from lifeledger.database.base import Database
from lifeledger.utils.resolvers import resolve_activity, resolve_domain, resolve_shop_item


def resolve_domain_or_exit(ctx: click.Context, db: Database, domain: str) -> int:
    """Resolve domain name or ID, or exit with a CLI error."""
    try:
        return resolve_domain(db.list_domains(), domain)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_activity_or_exit(ctx: click.Context, db: Database, domain_id: int, activity: str) -> int:
    """Resolve an activity of one domain by name or ID, or exit with a CLI error."""
    try:
        return resolve_activity(db.list_activities(domain_id=domain_id), activity)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def resolve_shop_item_or_exit(ctx: click.Context, db: Database, item: str) -> int:
    """Resolve shop item name or ID, or exit with a CLI error."""
    try:
        return resolve_shop_item(db.list_shop_items(), item)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
