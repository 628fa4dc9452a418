"""Catalog domain service: domains, activities and the placeholder defaults."""

import logging
from typing import Optional

from lifeledger.database.base import Database
from lifeledger.domain.constants import (
    DEFAULT_DOMAINS,
    DEFAULT_SHOP_ITEMS,
    PLACEHOLDER_ACTIVITIES,
)
from lifeledger.domain.entities import Activity, AppSettings, Domain
from lifeledger.domain.errors import DomainNotFound, NotFoundError, activity_not_found, shop_item_not_found

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for reading and toggling the catalog."""

    def __init__(self, db: Database):
        """Initialize catalog service.

        Args:
            db: Database instance
        """
        self.db = db

    def ensure_initialized(self) -> bool:
        """Seed the placeholder catalog on first run.

        Returns:
            True if defaults were seeded, False if the store was already set up
        """
        if self.db.get_settings() is not None:
            return False

        with self.db.transaction():
            for name, base_rate, soft_cap in DEFAULT_DOMAINS:
                domain_id = self.db.create_domain(
                    name=name, base_rate=base_rate, daily_soft_cap_minutes=soft_cap
                )
                for activity_name in PLACEHOLDER_ACTIVITIES:
                    self.db.create_activity(domain_id=domain_id, name=activity_name)

            for category, name, price, cooldown, requires_review, real_cost in DEFAULT_SHOP_ITEMS:
                self.db.create_shop_item(
                    category=category,
                    name=name,
                    price_points=price,
                    cooldown_days=cooldown,
                    requires_review=requires_review,
                    real_cost_estimate=real_cost,
                )

            self.db.save_settings(AppSettings())

        logger.info(
            f"Seeded placeholder catalog: {len(DEFAULT_DOMAINS)} domains, {len(DEFAULT_SHOP_ITEMS)} shop items"
        )
        return True

    def get_settings(self) -> AppSettings:
        """Current settings, defaults if none are stored yet."""
        return self.db.get_settings() or AppSettings()

    def has_personal_config(self) -> bool:
        """Whether the catalog came from an imported config or backup."""
        return self.get_settings().config_imported

    def list_domains(self, active_only: bool = False) -> list[Domain]:
        """List domains in creation order."""
        return self.db.list_domains(active_only=active_only)

    def get_domain(self, domain_id: int) -> Optional[Domain]:
        """Get domain by ID."""
        return self.db.get_domain(domain_id)

    def list_activities(self, domain_id: Optional[int] = None, active_only: bool = False) -> list[Activity]:
        """List activities, optionally for one domain."""
        return self.db.list_activities(domain_id=domain_id, active_only=active_only)

    def set_domain_active(self, domain_id: int, is_active: bool) -> None:
        """Activate or deactivate a domain.

        Raises:
            DomainNotFound: If the domain does not exist
        """
        if self.db.get_domain(domain_id) is None:
            raise DomainNotFound(domain_id)
        self.db.set_domain_active(domain_id, is_active)
        logger.info(f"Domain {domain_id} {'activated' if is_active else 'deactivated'}")

    def set_activity_active(self, activity_id: int, is_active: bool) -> None:
        """Activate or deactivate an activity."""
        if self.db.get_activity(activity_id) is None:
            raise NotFoundError(activity_not_found(activity_id))
        self.db.set_activity_active(activity_id, is_active)
        logger.info(f"Activity {activity_id} {'activated' if is_active else 'deactivated'}")

    def set_shop_item_active(self, item_id: int, is_active: bool) -> None:
        """Activate or deactivate a shop item."""
        if self.db.get_shop_item(item_id) is None:
            raise NotFoundError(shop_item_not_found(item_id))
        self.db.set_shop_item_active(item_id, is_active)
        logger.info(f"Shop item {item_id} {'activated' if is_active else 'deactivated'}")
