"""Tests for session accounting."""

from datetime import datetime, timedelta

import pytest

from lifeledger.domain.entities import LedgerEntryType, SessionSource
from lifeledger.domain.errors import (
    DomainNotFound,
    HardCapExceeded,
    SessionTooShort,
    ValidationError,
)
from lifeledger.domain.session import calculate_points


@pytest.mark.parametrize(
    "duration, base_rate, multiplier, penalty, expected",
    [
        (4, 10, 1.0, False, 0),
        (5, 12, 1.0, False, 1),
        (60, 10, 1.0, False, 10),
        (60, 10, 1.0, True, 7),
        (15, 10, 1.0, False, 3),  # 2.5 rounds away from zero
        (45, 10, 1.1, False, 8),
        (90, 16, 1.25, False, 30),
    ],
)
def test_calculate_points(duration, base_rate, multiplier, penalty, expected):
    """Test point calculation, minimum length, penalty and rounding."""
    assert calculate_points(duration, base_rate, multiplier, penalty) == expected


def test_award_session_rejects_over_hard_cap(accountant, education):
    """Test that going from 700 to 725 minutes is rejected."""
    with pytest.raises(HardCapExceeded) as exc_info:
        accountant.award_session(education, 25, minutes_in_domain_today=0, total_minutes_today=700)

    assert exc_info.value.cap_minutes == 720


def test_award_session_allows_reaching_hard_cap(accountant, education):
    """Test that exactly reaching the hard cap is allowed."""
    award = accountant.award_session(education, 20, minutes_in_domain_today=0, total_minutes_today=700)
    assert award.points == 3


def test_award_session_soft_cap_penalty(accountant, education):
    """Test that the penalty applies once the domain soft cap is reached."""
    assert not accountant.award_session(education, 60, 359, 359).applies_penalty

    award = accountant.award_session(education, 60, 360, 360)
    assert award.applies_penalty
    assert award.points == 7


def test_record_manual_session(accountant, ledger_service, temp_db, education, now):
    """Test that a manual session is stored, flagged and booked."""
    result = accountant.record_session(education.id, 60, SessionSource.MANUAL, now=now)

    assert result.success
    session = result.value
    assert session.points_awarded == 10
    assert session.review_flag is True
    assert session.source is SessionSource.MANUAL
    assert session.end_time == now
    assert session.start_time == now - timedelta(minutes=60)

    entries = ledger_service.list_entries()
    assert len(entries) == 1
    assert entries[0].type is LedgerEntryType.EARN_SESSION
    assert entries[0].points_delta == 10
    assert entries[0].reference_id == session.id
    assert entries[0].description == "Manual Session: Education"
    assert ledger_service.balance() == 10
    assert temp_db.get_domain(education.id).lifetime_minutes == 60


def test_record_timer_session_not_flagged(accountant, ledger_service, education, reading, now):
    """Test that timer sessions are not flagged and carry the activity name."""
    result = accountant.record_session(
        education.id, 30, SessionSource.TIMER, activity_id=reading.id, now=now
    )

    assert result.success
    assert result.value.review_flag is False
    assert result.value.activity_id == reading.id
    assert ledger_service.list_entries()[0].description == "Session: Education - Reading"


def test_record_uses_pre_update_multiplier(accountant, temp_db, education, now):
    """Test that a session does not benefit from the level it unlocks."""
    temp_db.update_domain_lifetime(education.id, 25 * 60 - 10)

    result = accountant.record_session(education.id, 60, SessionSource.TIMER, now=now)

    assert result.value.points_awarded == 10
    domain = temp_db.get_domain(education.id)
    assert domain.lifetime_minutes == 25 * 60 + 50
    assert (domain.level, domain.multiplier) == (2, 1.1)


def test_record_short_session_earns_nothing(accountant, ledger_service, temp_db, education, now):
    """Test that sessions under five minutes are stored with zero points."""
    result = accountant.record_session(education.id, 4, SessionSource.TIMER, now=now)

    assert result.success
    assert result.value.points_awarded == 0
    assert "no points" in result.message
    assert ledger_service.list_entries() == []
    assert temp_db.get_domain(education.id).lifetime_minutes == 4


def test_record_zero_minutes_rejected(accountant, temp_db, education, now):
    """Test that a session shorter than a minute is not stored at all."""
    result = accountant.record_session(education.id, 0, SessionSource.TIMER, now=now)

    assert not result.success
    assert isinstance(result.error, SessionTooShort)
    assert accountant.list_sessions() == []


def test_record_hard_cap_rejects_everything(accountant, ledger_service, temp_db, education, exercise):
    """Test that a session past the hard cap leaves no trace."""
    morning = datetime(2024, 3, 15, 6, 0)
    assert accountant.record_session(education.id, 700, SessionSource.TIMER, start_time=morning).success
    balance = ledger_service.balance()

    result = accountant.record_session(
        exercise.id, 25, SessionSource.MANUAL, start_time=datetime(2024, 3, 15, 19, 0)
    )

    assert not result.success
    assert isinstance(result.error, HardCapExceeded)
    assert len(accountant.list_sessions()) == 1
    assert ledger_service.balance() == balance
    assert temp_db.get_domain(exercise.id).lifetime_minutes == 0


def test_record_hard_cap_counts_start_day_only(accountant, education, exercise):
    """Test that sessions of the previous day do not count towards today's cap."""
    assert accountant.record_session(
        education.id, 700, SessionSource.TIMER, start_time=datetime(2024, 3, 14, 6, 0)
    ).success

    result = accountant.record_session(
        exercise.id, 60, SessionSource.TIMER, start_time=datetime(2024, 3, 15, 9, 0)
    )

    assert result.success


def test_record_soft_cap_is_per_domain(accountant, education, exercise):
    """Test that the penalty only applies within the capped domain."""
    day = datetime(2024, 3, 15, 6, 0)
    accountant.record_session(exercise.id, 180, SessionSource.TIMER, start_time=day)

    penalized = accountant.record_session(
        exercise.id, 60, SessionSource.TIMER, start_time=day + timedelta(hours=4)
    )
    other = accountant.record_session(
        education.id, 60, SessionSource.TIMER, start_time=day + timedelta(hours=6)
    )

    assert penalized.value.points_awarded == 6  # 9 x 0.7 = 6.3
    assert other.value.points_awarded == 10


def test_record_unknown_domain(accountant, now):
    """Test that an unknown domain yields DomainNotFound."""
    result = accountant.record_session(999, 30, SessionSource.MANUAL, now=now)

    assert not result.success
    assert isinstance(result.error, DomainNotFound)
    assert "999" in result.message


def test_record_activity_of_other_domain(accountant, exercise, reading, now):
    """Test that an activity must belong to the session's domain."""
    result = accountant.record_session(
        exercise.id, 30, SessionSource.MANUAL, activity_id=reading.id, now=now
    )

    assert not result.success
    assert isinstance(result.error, ValidationError)
    assert accountant.list_sessions() == []


def test_record_raising_variant(accountant, education, now):
    """Test that record() raises instead of returning a result."""
    with pytest.raises(SessionTooShort):
        accountant.record(education.id, 0, SessionSource.TIMER, now=now)


def test_record_rolls_back_when_ledger_write_fails(
    accountant, ledger_service, temp_db, education, break_ledger_writes, now
):
    """Test that a failed earn entry leaves no session or lifetime change behind."""
    error = break_ledger_writes()

    result = accountant.record_session(education.id, 60, SessionSource.TIMER, now=now)

    assert not result.success
    assert result.error is error
    assert result.message == "disk I/O error"
    assert accountant.list_sessions() == []
    assert temp_db.get_domain(education.id).lifetime_minutes == 0
    assert ledger_service.balance() == 0
