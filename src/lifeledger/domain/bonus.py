"""Bonus domain service."""

import logging
from datetime import datetime
from typing import Any, Optional

from lifeledger.database.base import Database
from lifeledger.domain.constants import DEFAULT_BONUS_MILESTONES
from lifeledger.domain.entities import Bonus, LedgerEntryType, OperationResult
from lifeledger.domain.errors import DomainError, ValidationError
from lifeledger.domain.ledger import LedgerService
from lifeledger.utils.date_parser import local_now

logger = logging.getLogger(__name__)


class BonusService:
    """Service for one-off bonus awards."""

    def __init__(self, db: Database):
        """Initialize bonus service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def award_bonus(
        self,
        title: str,
        points: int,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> OperationResult:
        """Award a bonus and book it in the ledger.

        Args:
            title: What the bonus is for
            points: Positive number of points
            notes: Optional notes
            now: Award time (defaults to now)

        Returns:
            OperationResult whose value is the bonus ID on success
        """
        title = title.strip()
        notes = notes.strip() if notes else None
        timestamp = now or local_now()
        try:
            if not title:
                raise ValidationError("Bonus title must not be empty")
            if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
                raise ValidationError(f"Bonus points must be a positive whole number, got {points!r}")

            with self.db.transaction():
                bonus_id = self.db.create_bonus(timestamp=timestamp, title=title, points=points, notes=notes or None)
                self.ledger.append(
                    LedgerEntryType.EARN_BONUS,
                    points,
                    reference_id=bonus_id,
                    description=f"Bonus: {title}",
                    timestamp=timestamp,
                )
        except DomainError as e:
            logger.warning(f"Bonus '{title}' rejected: {e}")
            return OperationResult.failed(e)

        logger.info(f"Bonus {bonus_id} '{title}' awarded: {points} points")
        return OperationResult.ok(f"Bonus added! Earned {points:,} points.", value=bonus_id)

    def list_bonuses(self) -> list[Bonus]:
        """List bonuses newest first."""
        return self.db.list_bonuses()

    def milestones(self) -> list[dict[str, Any]]:
        """Suggested bonus milestones: imported ones, else the placeholders."""
        settings = self.db.get_settings()
        if settings is not None and settings.bonus_milestones:
            return list(settings.bonus_milestones)
        return [{"title": title, "points": points} for title, points in DEFAULT_BONUS_MILESTONES]
