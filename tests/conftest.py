"""Shared pytest fixtures for lifeledger tests."""

import json
import os
import tempfile
from datetime import datetime

import pytest

from lifeledger.database.factories import create_sqlite_database
from lifeledger.domain.backup import BackupService
from lifeledger.domain.bonus import BonusService
from lifeledger.domain.catalog import CatalogService
from lifeledger.domain.config_import import ConfigImporter
from lifeledger.domain.consistency import ConsistencyService
from lifeledger.domain.ledger import LedgerService
from lifeledger.domain.progress import ProgressService
from lifeledger.domain.session import SessionAccountant
from lifeledger.domain.shop import ShopRedemptionManager
from lifeledger.domain.timer import SessionTimer

# A fixed local wall-clock time used as "now" throughout the tests
NOW = datetime(2024, 3, 15, 18, 0)


def _create_temp_db():
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()
    return db


def _dispose(db):
    db.disconnect()
    if os.path.exists(db.database_path):
        os.unlink(db.database_path)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    db = _create_temp_db()
    yield db
    _dispose(db)


@pytest.fixture
def other_db():
    """A second, independent temporary database."""
    db = _create_temp_db()
    yield db
    _dispose(db)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def accountant(temp_db):
    """Create a SessionAccountant with a temporary database."""
    return SessionAccountant(temp_db)


@pytest.fixture
def session_timer(temp_db):
    """Create a SessionTimer with a temporary database."""
    return SessionTimer(temp_db)


@pytest.fixture
def shop_manager(temp_db):
    """Create a ShopRedemptionManager with a temporary database."""
    return ShopRedemptionManager(temp_db)


@pytest.fixture
def bonus_service(temp_db):
    """Create a BonusService with a temporary database."""
    return BonusService(temp_db)


@pytest.fixture
def config_importer(temp_db):
    """Create a ConfigImporter with a temporary database."""
    return ConfigImporter(temp_db)


@pytest.fixture
def backup_service(temp_db):
    """Create a BackupService with a temporary database."""
    return BackupService(temp_db)


@pytest.fixture
def catalog_service(temp_db):
    """Create a CatalogService with a temporary database."""
    return CatalogService(temp_db)


@pytest.fixture
def progress_service(temp_db):
    """Create a ProgressService with a temporary database."""
    return ProgressService(temp_db)


@pytest.fixture
def consistency_service(temp_db):
    """Create a ConsistencyService with a temporary database."""
    return ConsistencyService(temp_db)


@pytest.fixture
def education(temp_db):
    """A domain earning 10 points per hour with the default soft cap."""
    domain_id = temp_db.create_domain(name="Education", base_rate=10, daily_soft_cap_minutes=360)
    return temp_db.get_domain(domain_id)


@pytest.fixture
def exercise(temp_db):
    """A second domain with a lower soft cap."""
    domain_id = temp_db.create_domain(name="Exercise", base_rate=9, daily_soft_cap_minutes=180)
    return temp_db.get_domain(domain_id)


@pytest.fixture
def reading(temp_db, education):
    """An activity of the Education domain."""
    activity_id = temp_db.create_activity(domain_id=education.id, name="Reading")
    return temp_db.get_activity(activity_id)


@pytest.fixture
def cinema(temp_db):
    """A shop item with a one-week cooldown."""
    item_id = temp_db.create_shop_item(
        category="Relaxation", name="Cinema Trip", price_points=60, cooldown_days=7
    )
    return temp_db.get_shop_item(item_id)


@pytest.fixture
def car(temp_db):
    """A shop item that requires review."""
    item_id = temp_db.create_shop_item(
        category="Transport", name="Basic Car", price_points=500, requires_review=True
    )
    return temp_db.get_shop_item(item_id)


@pytest.fixture
def funded(bonus_service, now):
    """Give the ledger a 1,000 point balance through a bonus."""
    result = bonus_service.award_bonus("Seed money", 1000, now=now)
    assert result.success
    return result.value


@pytest.fixture
def v1_config():
    """A minimal version 1 personal configuration."""
    return {
        "version": 1,
        "domains": [
            {"name": "Business", "baseRate": 16, "dailySoftCapMinutes": 360, "isActive": True},
            {"name": "Exercise", "baseRate": 9, "dailySoftCapMinutes": 180, "isActive": True},
        ],
        "activities": [
            {"domainName": "Business", "activities": ["Sales calls", "Planning"]},
            {"domainName": "Exercise", "activities": ["Gym"]},
            {"domainName": "Unknown", "activities": ["Ghost"]},
        ],
        "shopItems": [
            {"category": "Relaxation", "name": "Cinema Trip", "pricePoints": 6000, "cooldownDays": 7,
             "requiresReview": False, "isActive": True},
            {"category": "Transport", "name": "Basic Car", "pricePoints": 2200000,
             "requiresReview": True, "isActive": True},
        ],
        "bonusMilestones": [{"title": "First paid invoice", "points": 5000}],
    }


@pytest.fixture
def v2_config():
    """A minimal version 2 personal configuration."""
    return {
        "version": 2,
        "meta": {"owner": "Sam", "timeZone": "Europe/London"},
        "economy": {"pointsPerPound": 100},
        "domains": [
            {"id": "biz", "name": "Business", "baseRate": 16, "dailySoftCapMinutes": 300,
             "dailyHardCapMinutes": 600, "colorHint": "#3366ff", "isActive": True},
            {"id": "edu", "name": "Education", "baseRate": 10, "isActive": True},
        ],
        "activityLibrary": [
            {"id": "biz-sales", "domainId": "biz", "name": "Sales calls", "tags": ["client"],
             "deepWorkEligible": False},
            {"id": "edu-read", "domainId": "edu", "name": "Reading", "rateOverride": 12,
             "minBlockMinutes": 25, "notesPrompt": "What did you learn?"},
            {"id": "lost", "domainId": "missing", "name": "Orphan"},
        ],
        "shopItems": [
            {"category": "Tech", "name": "AirPods", "pricePoints": 25000, "requiresReview": False,
             "requirements": ["edu-level-3"], "isActive": True},
        ],
        "bonusMilestones": [{"title": "Launch", "points": 200000}],
        "requirementsLibrary": {"edu-level-3": "Education level 3"},
    }


@pytest.fixture
def write_json(tmp_path):
    """Write a document to a JSON file and return its path."""

    def _write(document, name="document.json"):
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def break_ledger_writes(monkeypatch, temp_db):
    """Return a function that makes every later ledger entry write fail."""
    from lifeledger.domain.errors import PersistenceFailure

    def _break():
        error = PersistenceFailure("disk I/O error")

        def _fail(**kwargs):
            raise error

        monkeypatch.setattr(temp_db, "create_ledger_entry", _fail)
        return error

    return _break
