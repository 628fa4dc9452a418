"""Progress reporting across domains."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from lifeledger.database.base import Database
from lifeledger.domain.constants import DAILY_HARD_CAP_MINUTES
from lifeledger.domain.entities import Domain, LevelProgress
from lifeledger.domain.ledger import LedgerService
from lifeledger.domain.levels import level_progress


@dataclass(frozen=True)
class DomainProgress:
    domain: Domain
    progress: LevelProgress


@dataclass(frozen=True)
class ProgressTotals:
    total_hours: float
    total_levels: int
    average_multiplier: float


@dataclass(frozen=True)
class TodayStats:
    minutes: int
    points_earned: int
    remaining_minutes: int


class ProgressService:
    """Service for level progress and daily statistics."""

    def __init__(self, db: Database):
        """Initialize progress service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def domain_progress(self, active_only: bool = True) -> list[DomainProgress]:
        """Level progress for each domain."""
        return [
            DomainProgress(domain=domain, progress=level_progress(domain.lifetime_minutes))
            for domain in self.db.list_domains(active_only=active_only)
        ]

    def totals(self) -> ProgressTotals:
        """Totals over active domains. Average multiplier is 1.0 with no domains."""
        domains = self.db.list_domains(active_only=True)
        if not domains:
            return ProgressTotals(total_hours=0.0, total_levels=0, average_multiplier=1.0)
        return ProgressTotals(
            total_hours=sum(d.lifetime_minutes for d in domains) / 60,
            total_levels=sum(d.level for d in domains),
            average_multiplier=sum(d.multiplier for d in domains) / len(domains),
        )

    def today(self, now: Optional[datetime] = None) -> TodayStats:
        """Minutes and earned points for the local day containing ``now``."""
        start, end = self.ledger.today_range(now)
        minutes = self.ledger.total_minutes_in_range(start, end)
        return TodayStats(
            minutes=minutes,
            points_earned=self.ledger.points_earned_in_range(start, end),
            remaining_minutes=max(0, DAILY_HARD_CAP_MINUTES - minutes),
        )
