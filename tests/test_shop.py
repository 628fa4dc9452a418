"""Tests for shop redemptions."""

from datetime import timedelta

import pytest

from lifeledger.domain.constants import REVIEW_NOTE
from lifeledger.domain.entities import LedgerEntryType, Redemption
from lifeledger.domain.errors import (
    InsufficientBalance,
    InvalidEntry,
    NotFoundError,
    OnCooldown,
    ValidationError,
)
from lifeledger.domain.shop import cooldown_days_left


def test_purchase_insufficient_balance(shop_manager, cinema, now):
    """Test that an unaffordable purchase is rejected without side effects."""
    result = shop_manager.purchase(cinema.id, now=now)

    assert not result.success
    assert isinstance(result.error, InsufficientBalance)
    assert result.error.balance == 0
    assert result.error.price == 60
    assert shop_manager.recent_redemptions() == []


def test_purchase_creates_redemption_and_spend(shop_manager, ledger_service, cinema, funded, now):
    """Test that a purchase writes a redemption and its matching spend entry."""
    result = shop_manager.purchase(cinema.id, notes="Dune", now=now)

    assert result.success
    redemption = result.value
    assert redemption.price_points == 60
    assert redemption.shop_item_id == cinema.id
    assert redemption.notes == "Dune"

    spends = ledger_service.list_entries(entry_type=LedgerEntryType.SPEND_SHOP)
    assert len(spends) == 1
    assert spends[0].reference_id == redemption.id
    assert spends[0].points_delta == -redemption.price_points
    assert spends[0].description == "Purchase: Cinema Trip"
    assert ledger_service.balance() == 940


def test_purchase_on_cooldown(shop_manager, cinema, funded, now):
    """Test the cooldown window after a purchase."""
    assert shop_manager.purchase(cinema.id, now=now).success

    again = shop_manager.purchase(cinema.id, now=now)
    assert isinstance(again.error, OnCooldown)
    assert again.error.days_left == 7
    assert "7 more days" in again.message

    later = shop_manager.purchase(cinema.id, now=now + timedelta(days=8))
    assert later.success
    assert shop_manager.achieved_count(cinema.id) == 2


def test_balance_checked_before_cooldown(shop_manager, temp_db, cinema, now):
    """Test that insufficient balance is reported before cooldown."""
    temp_db.create_redemption(timestamp=now, shop_item_id=cinema.id, price_points=60)

    result = shop_manager.purchase(cinema.id, now=now)

    assert isinstance(result.error, InsufficientBalance)


def test_cooldown_days_left_rounds_up(cinema, now):
    """Test that partial days left count as a whole day."""
    history = [
        Redemption(id=1, timestamp=now - timedelta(days=20), shop_item_id=cinema.id, price_points=60),
        Redemption(id=2, timestamp=now - timedelta(days=6, hours=12), shop_item_id=cinema.id, price_points=60),
    ]

    assert cooldown_days_left(cinema, history, now) == 1
    assert cooldown_days_left(cinema, history, now + timedelta(hours=12)) == 0
    assert cooldown_days_left(cinema, [], now) == 0


def test_check_purchase_raises(shop_manager, cinema, now):
    """Test the raising check used before purchasing."""
    with pytest.raises(InsufficientBalance):
        shop_manager.check_purchase(cinema, 59, [], now)

    shop_manager.check_purchase(cinema, 60, [], now)


def test_review_item_gets_review_note(shop_manager, car, funded, now):
    """Test that review-gated items are flagged and noted."""
    assert shop_manager.requires_confirmation(car)

    result = shop_manager.purchase(car.id, now=now)

    assert result.success
    assert result.value.notes == REVIEW_NOTE


def test_purchase_unknown_item(shop_manager, funded, now):
    """Test purchasing an item that does not exist."""
    result = shop_manager.purchase(999, now=now)

    assert isinstance(result.error, NotFoundError)


def test_purchase_inactive_item(shop_manager, temp_db, cinema, funded, now):
    """Test that inactive items cannot be bought."""
    temp_db.set_shop_item_active(cinema.id, False)

    result = shop_manager.purchase(cinema.id, now=now)

    assert isinstance(result.error, ValidationError)
    assert shop_manager.achieved_count(cinema.id) == 0


def test_list_items_ordered_by_category_and_price(shop_manager, temp_db, cinema, car):
    """Test catalog ordering and active filtering."""
    temp_db.create_shop_item(category="Relaxation", name="Massage", price_points=40)
    hidden = temp_db.create_shop_item(category="Relaxation", name="Spa", price_points=90, is_active=False)

    names = [i.name for i in shop_manager.list_items()]
    assert names == ["Massage", "Cinema Trip", "Basic Car"]
    assert hidden in [i.id for i in shop_manager.list_items(active_only=False)]
    assert [i.name for i in shop_manager.list_items(category="Transport")] == ["Basic Car"]


def test_days_left_from_history(shop_manager, cinema, funded, now):
    """Test cooldown lookup from stored redemptions."""
    assert shop_manager.days_left(cinema, now) == 0
    shop_manager.purchase(cinema.id, now=now)
    assert shop_manager.days_left(cinema, now + timedelta(days=2)) == 5


def test_purchase_rolls_back_when_ledger_write_fails(
    shop_manager, ledger_service, temp_db, cinema, funded, break_ledger_writes, now
):
    """Test that a failed spend entry leaves no redemption behind."""
    error = break_ledger_writes()

    result = shop_manager.purchase(cinema.id, now=now)

    assert not result.success
    assert result.error is error
    assert result.message == "disk I/O error"
    assert temp_db.list_redemptions() == []
    assert shop_manager.achieved_count(cinema.id) == 0
    assert ledger_service.balance() == 1000


def test_purchase_of_free_item_writes_nothing(shop_manager, ledger_service, temp_db, funded, now):
    """Test that an item priced at zero cannot produce a redemption."""
    item_id = temp_db.create_shop_item(category="Misc", name="Sticker", price_points=0)

    result = shop_manager.purchase(item_id, now=now)

    assert not result.success
    assert isinstance(result.error, InvalidEntry)
    assert temp_db.list_redemptions() == []
    assert len(ledger_service.list_entries()) == 1
