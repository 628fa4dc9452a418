"""Shop redemption domain service."""

import logging
import math
from datetime import datetime
from typing import Optional, Sequence

from lifeledger.database.base import Database
from lifeledger.domain.constants import DAY_SECONDS, REVIEW_NOTE
from lifeledger.domain.entities import (
    LedgerEntryType,
    OperationResult,
    Redemption,
    ShopItem,
)
from lifeledger.domain.errors import (
    DomainError,
    InsufficientBalance,
    NotFoundError,
    OnCooldown,
    ValidationError,
    shop_item_not_found,
)
from lifeledger.domain.ledger import LedgerService
from lifeledger.utils.date_parser import local_now

logger = logging.getLogger(__name__)


def cooldown_days_left(item: ShopItem, history: Sequence[Redemption], now: datetime) -> int:
    """Whole days until an item can be redeemed again (0 when available).

    Only the most recent redemption in ``history`` counts.
    """
    if not item.cooldown_days or not history:
        return 0

    last = max(history, key=lambda r: r.timestamp)
    cooldown_seconds = item.cooldown_days * DAY_SECONDS
    elapsed = (now - last.timestamp).total_seconds()
    if elapsed >= cooldown_seconds:
        return 0
    return math.ceil((cooldown_seconds - elapsed) / DAY_SECONDS)


class ShopRedemptionManager:
    """Service for spending points on shop items."""

    def __init__(self, db: Database):
        """Initialize shop redemption manager.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def check_purchase(
        self,
        item: ShopItem,
        current_balance: int,
        history: Sequence[Redemption],
        now: Optional[datetime] = None,
    ) -> None:
        """Check whether an item may be purchased right now.

        Args:
            item: Item to purchase
            current_balance: Balance derived from the ledger
            history: Previous redemptions of this item
            now: Purchase time (defaults to now)

        Raises:
            InsufficientBalance: If the balance does not cover the price
            OnCooldown: If the item was redeemed within its cooldown window
        """
        if current_balance < item.price_points:
            raise InsufficientBalance(current_balance, item.price_points)

        days_left = cooldown_days_left(item, history, now or local_now())
        if days_left > 0:
            raise OnCooldown(days_left)

    def requires_confirmation(self, item: ShopItem) -> bool:
        """Whether the caller must obtain a heightened confirmation first.

        The manager only flags this; confirming is the caller's job.
        """
        return item.requires_review

    def purchase(
        self,
        item_id: int,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> OperationResult:
        """Redeem points for a shop item.

        The redemption (with its price snapshot) and the matching spend
        entry are written in one transaction.

        Returns:
            OperationResult whose value is the stored Redemption on success
        """
        now = now or local_now()
        try:
            item = self.db.get_shop_item(item_id)
            if item is None:
                raise NotFoundError(shop_item_not_found(item_id))
            if not item.is_active:
                raise ValidationError(f"Shop item '{item.name}' is not available")

            history = self.db.list_redemptions(shop_item_id=item.id)
            self.check_purchase(item, self.ledger.balance(), history, now)

            if notes is None and item.requires_review:
                notes = REVIEW_NOTE

            with self.db.transaction():
                redemption_id = self.db.create_redemption(
                    timestamp=now,
                    shop_item_id=item.id,
                    price_points=item.price_points,
                    notes=notes,
                )
                self.ledger.append(
                    LedgerEntryType.SPEND_SHOP,
                    -item.price_points,
                    reference_id=redemption_id,
                    description=f"Purchase: {item.name}",
                    timestamp=now,
                )
        except DomainError as e:
            logger.warning(f"Purchase of shop item {item_id} rejected: {e}")
            return OperationResult.failed(e)

        logger.info(f"Redeemed '{item.name}' for {item.price_points} points (redemption {redemption_id})")
        return OperationResult.ok(
            f"Purchased {item.name} for {item.price_points:,} points",
            value=self.db.get_redemption(redemption_id),
        )

    def get_item(self, item_id: int) -> Optional[ShopItem]:
        """Get shop item by ID."""
        return self.db.get_shop_item(item_id)

    def list_items(self, category: Optional[str] = None, active_only: bool = True) -> list[ShopItem]:
        """List shop items ordered by category and price."""
        return self.db.list_shop_items(category=category, active_only=active_only)

    def achieved_count(self, item_id: int) -> int:
        """Number of times an item has been redeemed."""
        return self.db.count_redemptions(item_id)

    def days_left(self, item: ShopItem, now: Optional[datetime] = None) -> int:
        """Cooldown days left for an item based on its stored history."""
        if not item.cooldown_days:
            return 0
        history = self.db.list_redemptions(shop_item_id=item.id, limit=1)
        return cooldown_days_left(item, history, now or local_now())

    def recent_redemptions(self, limit: int = 10) -> list[Redemption]:
        """Most recent redemptions across all items."""
        return self.db.list_redemptions(limit=limit)
