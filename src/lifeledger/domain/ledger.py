"""Ledger domain service.

The ledger is append-only and is the only source of truth for the point
balance. Time-windowed minute totals are read from sessions and live here
because the session accountant needs both for its cap checks.
"""

import logging
from datetime import date, datetime
from typing import Optional

from lifeledger.database.base import Database
from lifeledger.domain.entities import LedgerEntry, LedgerEntryType
from lifeledger.domain.errors import InvalidEntry
from lifeledger.utils.date_parser import day_bounds, local_now

logger = logging.getLogger(__name__)


def validate_entry_sign(entry_type: LedgerEntryType, points_delta: int) -> None:
    """Reject a delta whose sign does not match its entry type.

    Raises:
        InvalidEntry: If an earning is not positive or a spend is not negative
    """
    if entry_type.is_earning and points_delta <= 0:
        raise InvalidEntry(f"{entry_type.value} entries must have a positive points delta, got {points_delta}")
    if entry_type is LedgerEntryType.SPEND_SHOP and points_delta >= 0:
        raise InvalidEntry(f"{entry_type.value} entries must have a negative points delta, got {points_delta}")


class LedgerService:
    """Service for the points ledger and session time windows."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def append(
        self,
        entry_type: LedgerEntryType,
        points_delta: int,
        reference_id: int,
        description: str,
        timestamp: Optional[datetime] = None,
    ) -> int:
        """Append a ledger entry.

        Args:
            entry_type: Kind of point movement
            points_delta: Positive for earnings, negative for spends
            reference_id: ID of the session, bonus or redemption behind it
            description: Human-readable description
            timestamp: Entry time (defaults to now)

        Returns:
            Ledger entry ID

        Raises:
            InvalidEntry: If the delta sign does not match the type
        """
        validate_entry_sign(entry_type, points_delta)
        entry_id = self.db.create_ledger_entry(
            timestamp=timestamp or local_now(),
            entry_type=entry_type,
            points_delta=points_delta,
            reference_id=reference_id,
            description=description,
        )
        logger.info(f"Ledger {entry_type.value} {points_delta:+d} (ref {reference_id}): {description}")
        return entry_id

    def balance(self) -> int:
        """Current balance: the sum of every entry's points delta."""
        return self.db.sum_points_delta()

    def list_entries(
        self,
        entry_type: Optional[LedgerEntryType] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[LedgerEntry]:
        """List ledger entries, newest first."""
        return self.db.list_ledger_entries(entry_type=entry_type, start=start, end=end, limit=limit)

    def points_earned_in_range(self, start: datetime, end: datetime) -> int:
        """Sum of earnings (sessions and bonuses) in [start, end)."""
        return self.db.sum_points_delta(start=start, end=end, earnings_only=True)

    def minutes_in_range(self, domain_id: Optional[int], start: datetime, end: datetime) -> int:
        """Minutes of sessions started in [start, end), optionally for one domain."""
        return self.db.sum_session_minutes(start, end, domain_id=domain_id)

    def total_minutes_in_range(self, start: datetime, end: datetime) -> int:
        """Minutes of all sessions started in [start, end)."""
        return self.db.sum_session_minutes(start, end)

    def today_range(self, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
        """Local day containing ``now``."""
        return day_bounds((now or local_now()).date())

    def minutes_on_day(self, day: date, domain_id: Optional[int] = None) -> int:
        """Minutes logged on a local day, optionally for one domain."""
        start, end = day_bounds(day)
        return self.minutes_in_range(domain_id, start, end)
