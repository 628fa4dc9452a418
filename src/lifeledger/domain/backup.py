"""Full data backup: export, restore and reset."""

import logging
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from lifeledger.database.base import Database
from lifeledger.domain.config_import import describe_validation_error
from lifeledger.domain.entities import AppSettings, OperationResult
from lifeledger.domain.errors import DomainError, InvalidFormat
from lifeledger.domain.schemas import (
    ActivityRecord,
    BackupDocument,
    BonusRecord,
    DomainRecord,
    LedgerRecord,
    RedemptionRecord,
    SessionRecord,
    ShopItemRecord,
)
from lifeledger.utils.date_parser import local_now

logger = logging.getLogger(__name__)

BACKUP_VERSION = 1

# Table name -> (document key, record model)
_TABLES = {
    "domains": ("domains", DomainRecord),
    "activities": ("activities", ActivityRecord),
    "sessions": ("sessions", SessionRecord),
    "bonuses": ("bonuses", BonusRecord),
    "shop_items": ("shopItems", ShopItemRecord),
    "redemptions": ("redemptions", RedemptionRecord),
    "ledger": ("ledger", LedgerRecord),
}


class BackupService:
    """Handles full data export, restore and reset."""

    def __init__(self, db: Database):
        """Initialize backup service.

        Args:
            db: Database instance
        """
        self.db = db

    def export_backup(self, now: Optional[datetime] = None) -> dict[str, Any]:
        """Snapshot every table into a JSON-ready backup document."""
        tables = self.db.export_tables()
        data = {}
        for table, (key, model) in _TABLES.items():
            data[key] = [
                model.model_validate(record).model_dump(mode="json", by_alias=True)
                for record in tables[table]
            ]

        logger.info(
            f"Exported backup: {len(data['sessions'])} sessions, {len(data['ledger'])} ledger entries"
        )
        return {
            "version": BACKUP_VERSION,
            "exportedAt": (now or local_now()).isoformat(),
            "data": data,
        }

    def restore_backup(self, document: Any) -> OperationResult:
        """Replace ALL data with the contents of a backup document.

        Every record keeps its original ID. The catalog is marked as
        configured so placeholder defaults are not seeded over it.
        """
        try:
            if not isinstance(document, dict) or "data" not in document or not document.get("version"):
                raise InvalidFormat("Invalid backup file format")
            try:
                backup = BackupDocument.model_validate(document)
            except PydanticValidationError as e:
                raise InvalidFormat(f"Invalid backup file format: {describe_validation_error(e)}")

            records = backup.data.to_entities()
            with self.db.transaction():
                self.db.clear_all()
                self.db.bulk_insert(records)
                self.db.save_settings(AppSettings(config_imported=True, imported_at=local_now()))
        except DomainError as e:
            logger.warning(f"Backup restore rejected: {e}")
            return OperationResult.failed(e)

        logger.info(f"Restored backup with {len(records)} records")
        return OperationResult.ok(f"Data imported successfully: {len(records)} records restored", value=len(records))

    def reset_all_data(self) -> None:
        """Delete every record. Placeholder defaults are seeded on next start."""
        with self.db.transaction():
            self.db.clear_all()
        logger.info("All data reset")
