"""Tests for the session timer."""

from datetime import timedelta

import pytest

from lifeledger.domain.entities import SessionSource
from lifeledger.domain.errors import (
    ConflictError,
    DomainNotFound,
    HardCapExceeded,
    SessionAlreadyActive,
    SessionTooShort,
)


def test_start_and_status(session_timer, education, reading, now):
    """Test starting a timer stores it as the active timer."""
    session_timer.start(education.id, activity_id=reading.id, now=now)

    active = session_timer.status()
    assert active.domain_id == education.id
    assert active.activity_id == reading.id
    assert active.started_at == now
    assert not active.is_paused
    assert active.elapsed_seconds(now + timedelta(minutes=3)) == 180


def test_status_idle(session_timer):
    """Test that no timer is reported when idle."""
    assert session_timer.status() is None


def test_start_twice_rejected(session_timer, education, exercise, now):
    """Test that only one timer may be active."""
    session_timer.start(education.id, now=now)

    with pytest.raises(SessionAlreadyActive):
        session_timer.start(exercise.id, now=now)


def test_start_unknown_domain(session_timer, now):
    """Test that starting a timer needs an existing domain."""
    with pytest.raises(DomainNotFound):
        session_timer.start(42, now=now)
    assert session_timer.status() is None


def test_pause_resume_excludes_paused_time(session_timer, education, now):
    """Test that paused time does not count towards the session."""
    session_timer.start(education.id, now=now)
    session_timer.pause(now=now + timedelta(minutes=10))

    paused = session_timer.status()
    assert paused.is_paused
    assert paused.elapsed_seconds(now + timedelta(minutes=15)) == 600

    session_timer.resume(now=now + timedelta(minutes=20))
    result = session_timer.finish(now=now + timedelta(minutes=50))

    assert result.success
    assert result.value.duration_minutes == 40
    assert result.value.start_time == now
    assert result.value.end_time == now + timedelta(minutes=50)


def test_pause_twice_and_resume_running(session_timer, education, now):
    """Test pause and resume state conflicts."""
    session_timer.start(education.id, now=now)
    with pytest.raises(ConflictError):
        session_timer.resume(now=now)

    session_timer.pause(now=now)
    with pytest.raises(ConflictError):
        session_timer.pause(now=now)


def test_finish_records_timer_session(session_timer, ledger_service, education, now):
    """Test that finishing records an unflagged session and clears the timer."""
    session_timer.start(education.id, now=now)

    result = session_timer.finish(notes="Chapter 3", now=now + timedelta(minutes=60, seconds=59))

    assert result.success
    session = result.value
    assert session.source is SessionSource.TIMER
    assert session.review_flag is False
    assert session.duration_minutes == 60
    assert session.points_awarded == 10
    assert session.notes == "Chapter 3"
    assert ledger_service.balance() == 10
    assert session_timer.status() is None


def test_finish_too_short_keeps_timer(session_timer, accountant, education, now):
    """Test that a rejected finish leaves the timer for cancelling."""
    session_timer.start(education.id, now=now)

    result = session_timer.finish(now=now + timedelta(seconds=30))

    assert not result.success
    assert isinstance(result.error, SessionTooShort)
    assert session_timer.status() is not None
    assert accountant.list_sessions() == []


def test_finish_over_hard_cap_keeps_timer(session_timer, accountant, education, exercise, now):
    """Test that the hard cap also applies to timer sessions."""
    day_start = now.replace(hour=5, minute=0)
    accountant.record_session(exercise.id, 700, SessionSource.MANUAL, start_time=day_start)

    session_timer.start(education.id, now=now)
    result = session_timer.finish(now=now + timedelta(minutes=30))

    assert isinstance(result.error, HardCapExceeded)
    assert session_timer.status() is not None
    assert len(accountant.list_sessions()) == 1


def test_finish_without_timer(session_timer):
    """Test finishing when nothing is running."""
    result = session_timer.finish()

    assert not result.success
    assert isinstance(result.error, ConflictError)


def test_cancel(session_timer, accountant, education, now):
    """Test that cancelling discards the timer without a session."""
    session_timer.start(education.id, now=now)
    session_timer.cancel()

    assert session_timer.status() is None
    assert accountant.list_sessions() == []

    with pytest.raises(ConflictError):
        session_timer.cancel()


def test_finish_keeps_timer_when_ledger_write_fails(
    session_timer, accountant, temp_db, education, break_ledger_writes, now
):
    """Test that a failed write records nothing and keeps the timer."""
    session_timer.start(education.id, now=now)
    break_ledger_writes()

    result = session_timer.finish(now=now + timedelta(minutes=30))

    assert not result.success
    assert result.message == "disk I/O error"
    assert accountant.list_sessions() == []
    assert temp_db.get_domain(education.id).lifetime_minutes == 0
    assert session_timer.status().started_at == now
