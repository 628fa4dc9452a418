"""Single active session timer."""

import logging
from datetime import datetime
from typing import Optional

from lifeledger.database.base import Database
from lifeledger.domain.entities import ActiveTimer, OperationResult, SessionSource
from lifeledger.domain.errors import (
    ConflictError,
    DomainError,
    DomainNotFound,
    SessionAlreadyActive,
    ValidationError,
    activity_not_found,
    no_active_timer,
)
from lifeledger.domain.session import SessionAccountant
from lifeledger.utils.date_parser import local_now

logger = logging.getLogger(__name__)


class SessionTimer:
    """Service for the device's one running or paused timer."""

    def __init__(self, db: Database):
        """Initialize session timer.

        Args:
            db: Database instance
        """
        self.db = db
        self.accountant = SessionAccountant(db)

    def status(self) -> Optional[ActiveTimer]:
        """Return the active timer, or None when idle."""
        return self.db.get_active_timer()

    def start(
        self, domain_id: int, activity_id: Optional[int] = None, now: Optional[datetime] = None
    ) -> ActiveTimer:
        """Start timing a session.

        Raises:
            SessionAlreadyActive: If a timer is already running or paused
            DomainNotFound: If the domain does not exist
            ValidationError: If the activity is unknown or belongs elsewhere
        """
        existing = self.db.get_active_timer()
        if existing is not None:
            raise SessionAlreadyActive(
                f"A session is already active (started {existing.started_at:%H:%M}); finish or cancel it first"
            )

        if self.db.get_domain(domain_id) is None:
            raise DomainNotFound(domain_id)
        if activity_id is not None:
            activity = self.db.get_activity(activity_id)
            if activity is None:
                raise ValidationError(activity_not_found(activity_id))
            if activity.domain_id != domain_id:
                raise ValidationError(f"Activity '{activity.name}' does not belong to domain {domain_id}")

        timer = ActiveTimer(domain_id=domain_id, activity_id=activity_id, started_at=now or local_now())
        self.db.save_active_timer(timer)
        logger.info(f"Timer started for domain {domain_id} at {timer.started_at:%H:%M:%S}")
        return timer

    def pause(self, now: Optional[datetime] = None) -> ActiveTimer:
        """Pause the running timer."""
        timer = self._require_timer()
        if timer.is_paused:
            raise ConflictError("Timer is already paused")
        paused = ActiveTimer(
            domain_id=timer.domain_id,
            activity_id=timer.activity_id,
            started_at=timer.started_at,
            paused_at=now or local_now(),
            total_paused_seconds=timer.total_paused_seconds,
        )
        self.db.save_active_timer(paused)
        return paused

    def resume(self, now: Optional[datetime] = None) -> ActiveTimer:
        """Resume a paused timer."""
        timer = self._require_timer()
        if not timer.is_paused:
            raise ConflictError("Timer is not paused")
        now = now or local_now()
        resumed = ActiveTimer(
            domain_id=timer.domain_id,
            activity_id=timer.activity_id,
            started_at=timer.started_at,
            paused_at=None,
            total_paused_seconds=timer.total_paused_seconds + int((now - timer.paused_at).total_seconds()),
        )
        self.db.save_active_timer(resumed)
        return resumed

    def cancel(self) -> None:
        """Discard the active timer without recording anything."""
        self._require_timer()
        self.db.clear_active_timer()
        logger.info("Timer cancelled")

    def finish(self, notes: Optional[str] = None, now: Optional[datetime] = None) -> OperationResult:
        """Stop the timer and record its session.

        The session is recorded and the timer cleared in one transaction.
        On rejection the timer is left in place so it can be cancelled.
        """
        now = now or local_now()
        try:
            timer = self._require_timer()
            duration_minutes = timer.elapsed_seconds(now) // 60
            with self.db.transaction():
                session = self.accountant.record(
                    domain_id=timer.domain_id,
                    duration_minutes=duration_minutes,
                    source=SessionSource.TIMER,
                    start_time=timer.started_at,
                    end_time=now,
                    activity_id=timer.activity_id,
                    notes=notes,
                )
                self.db.clear_active_timer()
        except DomainError as e:
            logger.warning(f"Timer finish rejected: {e}")
            return OperationResult.failed(e)

        return OperationResult.ok(
            f"Session recorded: {session.duration_minutes} minutes, earned {session.points_awarded:,} points",
            value=session,
        )

    def _require_timer(self) -> ActiveTimer:
        timer = self.db.get_active_timer()
        if timer is None:
            raise ConflictError(no_active_timer())
        return timer
