"""Session accounting: turns completed work sessions into point awards."""

import logging
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from lifeledger.database.base import Database
from lifeledger.domain.constants import (
    DAILY_HARD_CAP_MINUTES,
    DEFAULT_DAILY_SOFT_CAP_MINUTES,
    MINIMUM_RECORDABLE_MINUTES,
    MINIMUM_SESSION_MINUTES,
    SOFT_CAP_PENALTY,
)
from lifeledger.domain.entities import (
    Domain,
    LedgerEntryType,
    OperationResult,
    Session,
    SessionAward,
    SessionSource,
)
from lifeledger.domain.errors import (
    DomainError,
    DomainNotFound,
    HardCapExceeded,
    SessionTooShort,
    ValidationError,
    activity_not_found,
)
from lifeledger.domain.ledger import LedgerService
from lifeledger.utils.date_parser import local_now

logger = logging.getLogger(__name__)


def calculate_points(
    duration_minutes: int,
    base_rate: float,
    multiplier: float,
    penalty: bool = False,
) -> int:
    """Points for a session.

    Sessions shorter than the minimum earn nothing. Otherwise points are
    hours x base rate x multiplier, reduced by the soft-cap penalty when
    it applies, rounded to the nearest integer with ties away from zero.
    """
    if duration_minutes < MINIMUM_SESSION_MINUTES:
        return 0

    points = Decimal(duration_minutes) / 60 * Decimal(str(base_rate)) * Decimal(str(multiplier))
    if penalty:
        points *= 1 - Decimal(SOFT_CAP_PENALTY)

    return int(points.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class SessionAccountant:
    """Service for awarding points for work sessions."""

    def __init__(self, db: Database):
        """Initialize session accountant.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def award_session(
        self,
        domain: Domain,
        duration_minutes: int,
        minutes_in_domain_today: int,
        total_minutes_today: int,
    ) -> SessionAward:
        """Compute the award for a session without touching storage.

        Uses the domain's current (pre-session) multiplier.

        Raises:
            HardCapExceeded: If the session pushes today's total past the hard cap
        """
        if total_minutes_today + duration_minutes > DAILY_HARD_CAP_MINUTES:
            raise HardCapExceeded(total_minutes_today, duration_minutes, DAILY_HARD_CAP_MINUTES)

        soft_cap = domain.daily_soft_cap_minutes or DEFAULT_DAILY_SOFT_CAP_MINUTES
        applies_penalty = minutes_in_domain_today >= soft_cap
        points = calculate_points(duration_minutes, domain.base_rate, domain.multiplier, applies_penalty)
        return SessionAward(points=points, applies_penalty=applies_penalty)

    def record_session(
        self,
        domain_id: int,
        duration_minutes: int,
        source: SessionSource,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        activity_id: Optional[int] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> OperationResult:
        """Record a completed session and award its points.

        The session, the domain's lifetime update and the ledger entry are
        written in one transaction. When only one end of the session is
        given the other is derived from the duration; with neither, the
        session is taken to end now.

        Returns:
            OperationResult whose value is the stored Session on success
        """
        try:
            session = self.record(
                domain_id=domain_id,
                duration_minutes=duration_minutes,
                source=source,
                start_time=start_time,
                end_time=end_time,
                activity_id=activity_id,
                notes=notes,
                now=now,
            )
        except DomainError as e:
            logger.warning(f"Session for domain {domain_id} rejected: {e}")
            return OperationResult.failed(e)

        if session.points_awarded:
            message = f"Session recorded: earned {session.points_awarded:,} points"
        else:
            message = f"Session recorded: {session.duration_minutes} minutes earn no points"
        return OperationResult.ok(message, value=session)

    def record(
        self,
        domain_id: int,
        duration_minutes: int,
        source: SessionSource,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        activity_id: Optional[int] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Session:
        """Record a session, raising on rejection.

        Callers that already hold a transaction use this form so that a
        rejection aborts their whole unit of work.

        Raises:
            SessionTooShort: If duration is below one minute
            DomainNotFound: If the domain does not exist
            ValidationError: If the activity is unknown or belongs elsewhere
            HardCapExceeded: If the day's hard cap would be exceeded
            PersistenceFailure: If storage fails
        """
        if duration_minutes < MINIMUM_RECORDABLE_MINUTES:
            raise SessionTooShort(
                f"Session too short (minimum {MINIMUM_RECORDABLE_MINUTES} minute), got {duration_minutes}"
            )

        domain = self.db.get_domain(domain_id)
        if domain is None:
            raise DomainNotFound(domain_id)

        activity_name = None
        if activity_id is not None:
            activity = self.db.get_activity(activity_id)
            if activity is None:
                raise ValidationError(activity_not_found(activity_id))
            if activity.domain_id != domain_id:
                raise ValidationError(
                    f"Activity '{activity.name}' does not belong to domain '{domain.name}'"
                )
            activity_name = activity.name

        if end_time is None:
            end_time = (
                start_time + timedelta(minutes=duration_minutes)
                if start_time is not None
                else (now or local_now())
            )
        if start_time is None:
            start_time = end_time - timedelta(minutes=duration_minutes)

        day = start_time.date()
        award = self.award_session(
            domain,
            duration_minutes,
            minutes_in_domain_today=self.ledger.minutes_on_day(day, domain_id=domain_id),
            total_minutes_today=self.ledger.minutes_on_day(day),
        )

        review_flag = source is SessionSource.MANUAL
        with self.db.transaction():
            session_id = self.db.create_session(
                start_time=start_time,
                end_time=end_time,
                duration_minutes=duration_minutes,
                domain_id=domain_id,
                points_awarded=award.points,
                source=source,
                review_flag=review_flag,
                activity_id=activity_id,
                notes=notes,
            )
            self.db.update_domain_lifetime(domain_id, domain.lifetime_minutes + duration_minutes)
            if award.points > 0:
                prefix = "Manual Session" if review_flag else "Session"
                suffix = f" - {activity_name}" if activity_name else ""
                self.ledger.append(
                    LedgerEntryType.EARN_SESSION,
                    award.points,
                    reference_id=session_id,
                    description=f"{prefix}: {domain.name}{suffix}",
                    timestamp=end_time,
                )

        logger.info(
            f"Recorded {source.value} session {session_id}: {duration_minutes} min in "
            f"'{domain.name}' for {award.points} points"
            + (" (soft cap penalty)" if award.applies_penalty else "")
        )
        return self.db.get_session(session_id)

    def list_sessions(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        domain_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[Session]:
        """List sessions newest first."""
        return self.db.list_sessions(start=start, end=end, domain_id=domain_id, limit=limit)
