"""Tests for bonus awards."""

import pytest

from lifeledger.domain.constants import DEFAULT_BONUS_MILESTONES
from lifeledger.domain.entities import LedgerEntryType
from lifeledger.domain.errors import ValidationError


def test_award_bonus_books_earning(bonus_service, ledger_service, now):
    """Test that a bonus and its ledger entry are written together."""
    result = bonus_service.award_bonus("  Launch a paid product ", 2000, notes="v1.0", now=now)

    assert result.success
    assert result.message == "Bonus added! Earned 2,000 points."
    bonus = bonus_service.list_bonuses()[0]
    assert bonus.id == result.value
    assert bonus.title == "Launch a paid product"
    assert bonus.notes == "v1.0"

    entry = ledger_service.list_entries()[0]
    assert entry.type is LedgerEntryType.EARN_BONUS
    assert entry.reference_id == bonus.id
    assert entry.description == "Bonus: Launch a paid product"
    assert ledger_service.balance() == 2000


@pytest.mark.parametrize("title, points", [("", 100), ("   ", 100), ("Gym", 0), ("Gym", -5), ("Gym", True)])
def test_award_bonus_invalid(bonus_service, ledger_service, title, points, now):
    """Test that invalid bonuses are rejected without writing anything."""
    result = bonus_service.award_bonus(title, points, now=now)

    assert not result.success
    assert isinstance(result.error, ValidationError)
    assert bonus_service.list_bonuses() == []
    assert ledger_service.balance() == 0


def test_milestones_default(bonus_service):
    """Test that placeholder milestones are offered before any import."""
    milestones = bonus_service.milestones()

    assert len(milestones) == len(DEFAULT_BONUS_MILESTONES)
    assert milestones[0] == {"title": DEFAULT_BONUS_MILESTONES[0][0], "points": DEFAULT_BONUS_MILESTONES[0][1]}


def test_milestones_from_imported_config(bonus_service, config_importer, v1_config):
    """Test that imported milestones replace the placeholders."""
    assert config_importer.import_config(v1_config).success

    assert bonus_service.milestones() == [{"title": "First paid invoice", "points": 5000}]


def test_award_bonus_rolls_back_when_ledger_write_fails(bonus_service, ledger_service, break_ledger_writes, now):
    """Test that a failed earn entry leaves no bonus behind."""
    error = break_ledger_writes()

    result = bonus_service.award_bonus("Launch", 500, now=now)

    assert not result.success
    assert result.error is error
    assert result.message == "disk I/O error"
    assert bonus_service.list_bonuses() == []
    assert ledger_service.balance() == 0
