"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Any, Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from lifeledger.domain.entities import (
    ActiveTimer,
    Activity,
    AppSettings,
    Bonus,
    Domain,
    LedgerEntry,
    LedgerEntryType,
    Redemption,
    Session,
    SessionSource,
    ShopItem,
)


class Database(ABC):
    """Abstract database interface for lifeledger.

    Writes made inside ``transaction()`` become visible together or not at
    all. Outside a transaction every write is committed on its own.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Group writes into one atomic unit. Nested blocks join the outer one."""
        pass

    # Settings operations
    @abstractmethod
    def get_settings(self) -> Optional[AppSettings]:
        """Get the settings record, or None before first initialization."""
        pass

    @abstractmethod
    def save_settings(self, settings: AppSettings) -> None:
        """Create or replace the settings record."""
        pass

    # Domain operations
    @abstractmethod
    def create_domain(
        self,
        name: str,
        base_rate: float,
        daily_soft_cap_minutes: int,
        daily_hard_cap_minutes: Optional[int] = None,
        external_config_id: Optional[str] = None,
        color_hint: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a domain with zero lifetime minutes. Returns domain ID."""
        pass

    @abstractmethod
    def get_domain(self, domain_id: int) -> Optional[Domain]:
        """Get domain by ID."""
        pass

    @abstractmethod
    def list_domains(self, active_only: bool = False) -> list[Domain]:
        """List domains in creation order."""
        pass

    @abstractmethod
    def update_domain_lifetime(self, domain_id: int, lifetime_minutes: int) -> None:
        """Set a domain's lifetime minutes. Level and multiplier follow from it."""
        pass

    @abstractmethod
    def set_domain_active(self, domain_id: int, is_active: bool) -> None:
        """Toggle domain activation."""
        pass

    # Activity operations
    @abstractmethod
    def create_activity(
        self,
        domain_id: int,
        name: str,
        external_config_id: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        rate_override: Optional[float] = None,
        deep_work_eligible: Optional[bool] = None,
        min_block_minutes: Optional[int] = None,
        notes_prompt: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create an activity. Returns activity ID."""
        pass

    @abstractmethod
    def get_activity(self, activity_id: int) -> Optional[Activity]:
        """Get activity by ID."""
        pass

    @abstractmethod
    def list_activities(self, domain_id: Optional[int] = None, active_only: bool = False) -> list[Activity]:
        """List activities, optionally filtered by domain."""
        pass

    @abstractmethod
    def set_activity_active(self, activity_id: int, is_active: bool) -> None:
        """Toggle activity activation."""
        pass

    # Shop operations
    @abstractmethod
    def create_shop_item(
        self,
        category: str,
        name: str,
        price_points: int,
        cooldown_days: Optional[int] = None,
        requires_review: bool = False,
        requirements: Optional[Sequence[str]] = None,
        description: Optional[str] = None,
        real_cost_estimate: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a shop item. Returns item ID."""
        pass

    @abstractmethod
    def get_shop_item(self, item_id: int) -> Optional[ShopItem]:
        """Get shop item by ID."""
        pass

    @abstractmethod
    def list_shop_items(self, category: Optional[str] = None, active_only: bool = False) -> list[ShopItem]:
        """List shop items, optionally filtered by category."""
        pass

    @abstractmethod
    def set_shop_item_active(self, item_id: int, is_active: bool) -> None:
        """Toggle shop item activation."""
        pass

    @abstractmethod
    def clear_catalog(self) -> None:
        """Delete all domains, activities and shop items. History is untouched."""
        pass

    # Session operations
    @abstractmethod
    def create_session(
        self,
        start_time: datetime,
        end_time: datetime,
        duration_minutes: int,
        domain_id: int,
        points_awarded: int,
        source: SessionSource,
        review_flag: bool,
        activity_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a session. Returns session ID."""
        pass

    @abstractmethod
    def get_session(self, session_id: int) -> Optional[Session]:
        """Get session by ID."""
        pass

    @abstractmethod
    def list_sessions(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        domain_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[Session]:
        """List sessions newest first, by start time in [start, end)."""
        pass

    @abstractmethod
    def sum_session_minutes(self, start: datetime, end: datetime, domain_id: Optional[int] = None) -> int:
        """Sum durations of sessions that started in [start, end)."""
        pass

    # Bonus operations
    @abstractmethod
    def create_bonus(self, timestamp: datetime, title: str, points: int, notes: Optional[str] = None) -> int:
        """Create a bonus. Returns bonus ID."""
        pass

    @abstractmethod
    def list_bonuses(self) -> list[Bonus]:
        """List bonuses newest first."""
        pass

    @abstractmethod
    def delete_bonus(self, bonus_id: int) -> None:
        """Delete a bonus. Used only by consistency repair."""
        pass

    # Redemption operations
    @abstractmethod
    def create_redemption(
        self, timestamp: datetime, shop_item_id: int, price_points: int, notes: Optional[str] = None
    ) -> int:
        """Create a redemption. Returns redemption ID."""
        pass

    @abstractmethod
    def get_redemption(self, redemption_id: int) -> Optional[Redemption]:
        """Get redemption by ID."""
        pass

    @abstractmethod
    def list_redemptions(self, shop_item_id: Optional[int] = None, limit: Optional[int] = None) -> list[Redemption]:
        """List redemptions newest first, optionally for one item."""
        pass

    @abstractmethod
    def count_redemptions(self, shop_item_id: int) -> int:
        """Count redemptions of a shop item."""
        pass

    @abstractmethod
    def delete_redemption(self, redemption_id: int) -> None:
        """Delete a redemption. Used only by consistency repair."""
        pass

    # Ledger operations
    @abstractmethod
    def create_ledger_entry(
        self,
        timestamp: datetime,
        entry_type: LedgerEntryType,
        points_delta: int,
        reference_id: int,
        description: str,
    ) -> int:
        """Append a ledger entry. Returns entry ID."""
        pass

    @abstractmethod
    def list_ledger_entries(
        self,
        entry_type: Optional[LedgerEntryType] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[LedgerEntry]:
        """List ledger entries newest first, by timestamp in [start, end)."""
        pass

    @abstractmethod
    def sum_points_delta(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        earnings_only: bool = False,
    ) -> int:
        """Sum points deltas of ledger entries, optionally in [start, end)."""
        pass

    @abstractmethod
    def delete_ledger_entry(self, entry_id: int) -> None:
        """Delete a ledger entry. Used only by consistency repair."""
        pass

    # Active timer operations
    @abstractmethod
    def get_active_timer(self) -> Optional[ActiveTimer]:
        """Get the running or paused timer, if any."""
        pass

    @abstractmethod
    def save_active_timer(self, timer: ActiveTimer) -> None:
        """Create or replace the active timer."""
        pass

    @abstractmethod
    def clear_active_timer(self) -> None:
        """Remove the active timer."""
        pass

    # Backup operations
    @abstractmethod
    def export_tables(self) -> dict[str, list[Any]]:
        """Return every record of every table, keyed by table name."""
        pass

    @abstractmethod
    def bulk_insert(self, records: Sequence[Any]) -> None:
        """Insert domain entities verbatim, keeping their IDs."""
        pass

    @abstractmethod
    def clear_all(self) -> None:
        """Delete every record of every table, settings and timer included."""
        pass
