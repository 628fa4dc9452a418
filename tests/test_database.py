"""Tests for the SQLAlchemy persistence layer."""

from datetime import timedelta

import pytest

from lifeledger.database.factories import create_sqlite_database, default_database_path
from lifeledger.domain.entities import ActiveTimer, AppSettings


def test_level_is_derived_from_lifetime(temp_db):
    """Test that level and multiplier follow the stored lifetime minutes."""
    domain_id = temp_db.create_domain(name="Business", base_rate=16, daily_soft_cap_minutes=360)
    assert (temp_db.get_domain(domain_id).level, temp_db.get_domain(domain_id).multiplier) == (1, 1.0)

    temp_db.update_domain_lifetime(domain_id, 150 * 60)

    domain = temp_db.get_domain(domain_id)
    assert (domain.level, domain.multiplier) == (4, 1.4)


def test_transaction_rolls_back_on_error(temp_db, now):
    """Test that writes inside a failed transaction are discarded."""
    with pytest.raises(RuntimeError):
        with temp_db.transaction():
            temp_db.create_bonus(timestamp=now, title="Never", points=10)
            raise RuntimeError("boom")

    assert temp_db.list_bonuses() == []


def test_nested_transactions_join_outer(temp_db, now):
    """Test that an inner block does not commit on its own."""
    with pytest.raises(RuntimeError):
        with temp_db.transaction():
            with temp_db.transaction():
                temp_db.create_bonus(timestamp=now, title="Inner", points=10)
            temp_db.create_bonus(timestamp=now, title="Outer", points=10)
            raise RuntimeError("boom")

    assert temp_db.list_bonuses() == []


def test_transaction_commits(temp_db, now):
    """Test that a successful transaction is visible to a fresh session."""
    with temp_db.transaction():
        temp_db.create_bonus(timestamp=now, title="Kept", points=10)

    temp_db.disconnect()
    assert [b.title for b in temp_db.list_bonuses()] == ["Kept"]


def test_clear_catalog_keeps_history(temp_db, education, reading, cinema, now):
    """Test that clearing the catalog leaves sessions and redemptions."""
    temp_db.create_redemption(timestamp=now, shop_item_id=cinema.id, price_points=60)

    temp_db.clear_catalog()

    assert temp_db.list_domains() == []
    assert temp_db.list_activities() == []
    assert temp_db.list_shop_items() == []
    assert len(temp_db.list_redemptions()) == 1


def test_settings_round_trip(temp_db, now):
    """Test the single settings record."""
    assert temp_db.get_settings() is None

    temp_db.save_settings(AppSettings(config_imported=True, config_version=2, config_meta={"owner": "Sam"}))
    temp_db.save_settings(AppSettings(config_imported=True, config_version=1, imported_at=now))

    settings = temp_db.get_settings()
    assert settings.config_version == 1
    assert settings.config_meta is None
    assert settings.imported_at == now


def test_active_timer_round_trip(temp_db, education, now):
    """Test saving, replacing and clearing the active timer."""
    temp_db.save_active_timer(ActiveTimer(domain_id=education.id, started_at=now))
    temp_db.save_active_timer(
        ActiveTimer(domain_id=education.id, started_at=now, paused_at=now + timedelta(minutes=5))
    )

    timer = temp_db.get_active_timer()
    assert timer.is_paused
    assert timer.paused_at == now + timedelta(minutes=5)

    temp_db.clear_active_timer()
    assert temp_db.get_active_timer() is None


def test_export_tables_keys(temp_db):
    """Test that every backed-up table is exported."""
    assert set(temp_db.export_tables()) == {
        "domains",
        "activities",
        "sessions",
        "bonuses",
        "shop_items",
        "redemptions",
        "ledger",
    }


def test_factory_creates_missing_directories(tmp_path):
    """Test that an explicit path in a new directory is usable."""
    path = tmp_path / "nested" / "dir" / "ledger.db"

    db = create_sqlite_database(database_path=str(path))
    db.connect()
    db.initialize_schema()
    db.disconnect()

    assert path.exists()


def test_factory_reads_environment(tmp_path, monkeypatch):
    """Test that LIFELEDGER_DB_PATH is used when no path is given."""
    path = tmp_path / "from-env.db"
    monkeypatch.setenv("LIFELEDGER_DB_PATH", str(path))

    db = create_sqlite_database()
    db.connect()
    db.initialize_schema()
    db.disconnect()

    assert path.exists()


def test_factory_default_location(tmp_path, monkeypatch):
    """Test the fallback location under the home directory."""
    monkeypatch.delenv("LIFELEDGER_DB_PATH", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    create_sqlite_database()

    assert default_database_path() == tmp_path / ".lifeledger" / "lifeledger.db"
    assert (tmp_path / ".lifeledger").is_dir()
