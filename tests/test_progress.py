"""Tests for progress reporting."""

from datetime import timedelta

import pytest

from lifeledger.domain.entities import SessionSource


def test_domain_progress(progress_service, temp_db, education, exercise):
    """Test per-domain level progress."""
    temp_db.update_domain_lifetime(education.id, 30 * 60)

    progress = {p.domain.name: p.progress for p in progress_service.domain_progress()}

    assert progress["Education"].level == 2
    assert progress["Education"].percentage == pytest.approx(10.0)
    assert progress["Exercise"].level == 1


def test_totals(progress_service, temp_db, education, exercise):
    """Test totals over active domains."""
    temp_db.update_domain_lifetime(education.id, 25 * 60)
    temp_db.update_domain_lifetime(exercise.id, 60)

    totals = progress_service.totals()

    assert totals.total_hours == pytest.approx(26.0)
    assert totals.total_levels == 3
    assert totals.average_multiplier == pytest.approx(1.05)


def test_totals_without_domains(progress_service):
    """Test totals when there are no active domains."""
    totals = progress_service.totals()
    assert (totals.total_hours, totals.total_levels, totals.average_multiplier) == (0.0, 0, 1.0)


def test_today(progress_service, accountant, bonus_service, education, now):
    """Test today's minutes, earnings and remaining capacity."""
    accountant.record_session(education.id, 120, SessionSource.TIMER, now=now)
    accountant.record_session(education.id, 60, SessionSource.TIMER, now=now - timedelta(days=1))
    bonus_service.award_bonus("Streak", 50, now=now)

    today = progress_service.today(now)

    assert today.minutes == 120
    assert today.points_earned == 70
    assert today.remaining_minutes == 600
