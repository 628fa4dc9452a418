"""Domain model entities for lifeledger.

These are pure data classes representing economy concepts, independent of
database schema. Derived values (domain level and multiplier) are filled in
by the mappers from their source facts and are never stored.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from lifeledger.domain.constants import DEFAULT_DAILY_SOFT_CAP_MINUTES
from lifeledger.domain.errors import DomainError


class LedgerEntryType(str, Enum):
    """Kind of point movement recorded in the ledger."""

    EARN_SESSION = "earn_session"
    EARN_BONUS = "earn_bonus"
    SPEND_SHOP = "spend_shop"

    @property
    def is_earning(self) -> bool:
        return self in (LedgerEntryType.EARN_SESSION, LedgerEntryType.EARN_BONUS)


class SessionSource(str, Enum):
    """How a session was captured."""

    TIMER = "timer"
    MANUAL = "manual"


@dataclass(frozen=True)
class Domain:
    """Productivity domain with its lifetime progress."""

    id: int
    name: str
    base_rate: float
    lifetime_minutes: int
    level: int
    multiplier: float
    is_active: bool
    daily_soft_cap_minutes: int = DEFAULT_DAILY_SOFT_CAP_MINUTES
    daily_hard_cap_minutes: Optional[int] = None
    external_config_id: Optional[str] = None
    color_hint: Optional[str] = None


@dataclass(frozen=True)
class Activity:
    """Activity belonging to exactly one domain."""

    id: int
    domain_id: int
    name: str
    is_active: bool
    external_config_id: Optional[str] = None
    tags: tuple[str, ...] = ()
    rate_override: Optional[float] = None
    deep_work_eligible: Optional[bool] = None
    min_block_minutes: Optional[int] = None
    notes_prompt: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """Completed work session. Immutable once created."""

    id: int
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    domain_id: int
    points_awarded: int
    source: SessionSource
    review_flag: bool
    activity_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class Bonus:
    """Manually triggered one-off award."""

    id: int
    timestamp: datetime
    title: str
    points: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class ShopItem:
    """Reward catalog entry."""

    id: int
    category: str
    name: str
    price_points: int
    requires_review: bool
    is_active: bool
    cooldown_days: Optional[int] = None
    requirements: tuple[str, ...] = ()
    description: Optional[str] = None
    real_cost_estimate: Optional[str] = None


@dataclass(frozen=True)
class Redemption:
    """Purchase history record with the price snapshot taken at purchase time."""

    id: int
    timestamp: datetime
    shop_item_id: int
    price_points: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class LedgerEntry:
    """Append-only point movement. The ledger is the only source of balance."""

    id: int
    timestamp: datetime
    type: LedgerEntryType
    points_delta: int
    reference_id: int
    description: str


@dataclass(frozen=True)
class AppSettings:
    """Explicit application state that used to live in ambient flags."""

    config_imported: bool = False
    config_version: Optional[int] = None
    config_meta: Optional[dict[str, Any]] = None
    full_config: Optional[dict[str, Any]] = None
    bonus_milestones: Optional[list[dict[str, Any]]] = None
    imported_at: Optional[datetime] = None


@dataclass(frozen=True)
class ActiveTimer:
    """The single running or paused timer on this device."""

    domain_id: int
    started_at: datetime
    activity_id: Optional[int] = None
    paused_at: Optional[datetime] = None
    total_paused_seconds: int = 0

    @property
    def is_paused(self) -> bool:
        return self.paused_at is not None

    def elapsed_seconds(self, now: datetime) -> int:
        """Active seconds since start, excluding paused time."""
        paused = self.total_paused_seconds
        if self.paused_at is not None:
            paused += int((now - self.paused_at).total_seconds())
        return max(0, int((now - self.started_at).total_seconds()) - paused)


@dataclass(frozen=True)
class SessionAward:
    """Outcome of the point calculation for a single session."""

    points: int
    applies_penalty: bool


@dataclass(frozen=True)
class LevelProgress:
    """Progress of a lifetime-minutes total through the level table."""

    level: int
    multiplier: float
    hours: float
    current_threshold_hours: float
    next_threshold_hours: float
    percentage: float
    is_max_level: bool

    @property
    def hours_to_next_level(self) -> float:
        if self.is_max_level:
            return 0.0
        return max(0.0, self.next_threshold_hours - self.hours)


@dataclass(frozen=True)
class OperationResult:
    """Structured success/failure outcome of a user-triggered operation."""

    success: bool
    message: str
    error: Optional[DomainError] = None
    value: Any = None

    @classmethod
    def ok(cls, message: str, value: Any = None) -> "OperationResult":
        return cls(success=True, message=message, value=value)

    @classmethod
    def failed(cls, error: DomainError) -> "OperationResult":
        return cls(success=False, message=str(error), error=error)


@dataclass(frozen=True)
class ConsistencyReport:
    """Records that break the record/ledger-entry pairing."""

    orphan_redemption_ids: list[int] = field(default_factory=list)
    orphan_bonus_ids: list[int] = field(default_factory=list)
    unbooked_session_ids: list[int] = field(default_factory=list)
    dangling_entry_ids: list[int] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not (
            self.orphan_redemption_ids
            or self.orphan_bonus_ids
            or self.unbooked_session_ids
            or self.dangling_entry_ids
        )
