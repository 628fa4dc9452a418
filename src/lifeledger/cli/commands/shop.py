"""Reward shop commands."""

import click
from lifeledger.domain.catalog import CatalogService
from lifeledger.domain.errors import DomainError
from lifeledger.domain.ledger import LedgerService
from lifeledger.domain.shop import ShopRedemptionManager
from lifeledger.cli.error_handling import handle_domain_error, report_result
from lifeledger.cli.resolution import resolve_shop_item_or_exit


@click.group()
def shop_group():
    """Spend points on rewards."""
    pass


@shop_group.command("list")
@click.option("--category", help="Only items in this category")
@click.option("--all", "show_all", is_flag=True, help="Include inactive items")
@click.pass_context
def list_items(ctx, category: str | None, show_all: bool):
    """List shop items with price, cooldown and times redeemed.

    Items marked with ! require review before buying.
    """
    db = ctx.obj["db"]
    manager = ShopRedemptionManager(db)

    items = manager.list_items(category=category, active_only=not show_all)
    if not items:
        click.echo("No shop items found.")
        return

    click.echo(f"\nBalance: {LedgerService(db).balance():,} points")
    current_category = None
    for item in items:
        if item.category != current_category:
            current_category = item.category
            click.echo(f"\n{current_category}")
            click.echo("-" * 80)

        flags = "!" if item.requires_review else " "
        extras = []
        days_left = manager.days_left(item)
        if days_left:
            extras.append(f"cooldown {days_left}d left")
        elif item.cooldown_days:
            extras.append(f"cooldown {item.cooldown_days}d")
        achieved = manager.achieved_count(item.id)
        if achieved:
            extras.append(f"bought x{achieved}")
        if not item.is_active:
            extras.append("inactive")
        suffix = f"  ({', '.join(extras)})" if extras else ""
        click.echo(f"ID: {item.id:3d} |{flags}{item.name:32s} | {item.price_points:>12,} pts{suffix}")


@shop_group.command("buy")
@click.argument("item", metavar="ITEM")
@click.option("--notes", help="Notes for the redemption")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.option("--confirm-review", is_flag=True, help="Confirm that a review-gated item has been reviewed")
@click.pass_context
def buy_item(ctx, item: str, notes: str | None, yes: bool, confirm_review: bool):
    """Buy a shop item.

    ITEM can be an item name or ID. Items that require review always ask
    for confirmation unless --confirm-review is given.

    Examples:
        lifeledger shop buy "Cinema Trip"
        lifeledger shop buy 7 --yes --notes "Dune"
    """
    db = ctx.obj["db"]
    manager = ShopRedemptionManager(db)

    item_id = resolve_shop_item_or_exit(ctx, db, item)
    shop_item = manager.get_item(item_id)

    if manager.requires_confirmation(shop_item) and not confirm_review:
        click.echo(f"Warning: '{shop_item.name}' requires review before action.", err=True)
        if not click.confirm("Has this purchase been reviewed?"):
            click.echo("Purchase cancelled.")
            return
    elif not yes:
        if not click.confirm(f"Buy '{shop_item.name}' for {shop_item.price_points:,} points?"):
            click.echo("Purchase cancelled.")
            return

    result = manager.purchase(item_id, notes=notes)
    report_result(ctx, result)
    click.echo(f"Remaining balance: {manager.ledger.balance():,} points")


@shop_group.command("history")
@click.option("--limit", type=int, default=10, show_default=True, help="Maximum number of redemptions")
@click.pass_context
def history(ctx, limit: int):
    """Show recent redemptions."""
    db = ctx.obj["db"]
    manager = ShopRedemptionManager(db)

    redemptions = manager.recent_redemptions(limit=limit)
    if not redemptions:
        click.echo("No redemptions yet.")
        return

    names = {i.id: i.name for i in manager.list_items(active_only=False)}
    click.echo("\nRecent redemptions:")
    click.echo("-" * 80)
    for r in redemptions:
        click.echo(
            f"{r.timestamp:%Y-%m-%d %H:%M} | {names.get(r.shop_item_id, 'Removed item'):32s} | "
            f"{r.price_points:>12,} pts"
        )
        if r.notes:
            click.echo(f"                 {r.notes}")


def _set_item_active(ctx, item: str, is_active: bool) -> None:
    db = ctx.obj["db"]
    item_id = resolve_shop_item_or_exit(ctx, db, item)
    try:
        CatalogService(db).set_shop_item_active(item_id, is_active)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"{'Activated' if is_active else 'Deactivated'} shop item {item_id}")


@shop_group.command("activate")
@click.argument("item", metavar="ITEM")
@click.pass_context
def activate_item(ctx, item: str):
    """Make a shop item available."""
    _set_item_active(ctx, item, True)


@shop_group.command("deactivate")
@click.argument("item", metavar="ITEM")
@click.pass_context
def deactivate_item(ctx, item: str):
    """Hide a shop item. Its redemption history is kept."""
    _set_item_active(ctx, item, False)


def register_commands(cli):
    """Register shop commands with main CLI."""
    cli.add_command(shop_group, name="shop")
