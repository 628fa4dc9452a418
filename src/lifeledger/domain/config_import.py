"""Personal configuration import.

Importing replaces the catalog (domains, activities and shop items) in one
transaction. Sessions, bonuses, redemptions and the ledger are never
touched, so re-importing the same document only rebuilds the catalog.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from lifeledger.database.base import Database
from lifeledger.domain.entities import AppSettings, OperationResult
from lifeledger.domain.errors import DomainError, InvalidFormat
from lifeledger.domain.schemas import (
    PersonalConfigV1,
    PersonalConfigV2,
    ShopItemConfig,
    personal_config_adapter,
)
from lifeledger.utils.date_parser import local_now

logger = logging.getLogger(__name__)


def describe_validation_error(error: PydanticValidationError) -> str:
    """Condense a pydantic error into one line naming the first bad field."""
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    suffix = f" (and {error.error_count() - 1} more)" if error.error_count() > 1 else ""
    return f"{location}: {first['msg']}{suffix}" if location else f"{first['msg']}{suffix}"


def parse_config(document: Any) -> Union[PersonalConfigV1, PersonalConfigV2]:
    """Validate a raw configuration document.

    Raises:
        InvalidFormat: If the document is not an object, has no recognized
            version or misses a required section
    """
    if not isinstance(document, dict):
        raise InvalidFormat("Invalid config file format: expected a JSON object")
    if document.get("version") not in (1, 2):
        raise InvalidFormat(
            f"Invalid config file format: unsupported version {document.get('version')!r} (expected 1 or 2)"
        )
    try:
        return personal_config_adapter.validate_python(document)
    except PydanticValidationError as e:
        raise InvalidFormat(f"Invalid config file format: {describe_validation_error(e)}")


def load_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a configuration document from a JSON file.

    Raises:
        InvalidFormat: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidFormat(f"Invalid JSON in {path}: {e}")
    except OSError as e:
        raise InvalidFormat(f"Could not read {path}: {e}")


class ConfigImporter:
    """Service that replaces the catalog from a personal configuration."""

    def __init__(self, db: Database):
        """Initialize config importer.

        Args:
            db: Database instance
        """
        self.db = db

    def import_config(self, document: Any, now: Optional[datetime] = None) -> OperationResult:
        """Validate a configuration document and replace the catalog with it.

        Args:
            document: Parsed JSON document (version 1 or 2)
            now: Import time recorded in settings (defaults to now)

        Returns:
            OperationResult with the imported counts in its message
        """
        try:
            config = parse_config(document)
            with self.db.transaction():
                self.db.clear_catalog()
                if isinstance(config, PersonalConfigV2):
                    counts = self._import_v2(config)
                else:
                    counts = self._import_v1(config)
                self._save_settings(config, document, now or local_now())
        except DomainError as e:
            logger.warning(f"Config import rejected: {e}")
            return OperationResult.failed(e)

        domains, activities, shop_items = counts
        logger.info(
            f"Imported v{config.version} config: {domains} domains, {activities} activities, {shop_items} shop items"
        )
        return OperationResult.ok(
            f"Successfully imported: {domains} domains, {activities} activities, {shop_items} shop items",
            value=counts,
        )

    def _import_v1(self, config: PersonalConfigV1) -> tuple[int, int, int]:
        domain_ids = {}
        for domain in config.domains:
            domain_ids[domain.name] = self.db.create_domain(
                name=domain.name,
                base_rate=domain.base_rate,
                daily_soft_cap_minutes=domain.daily_soft_cap_minutes,
                is_active=domain.is_active,
            )

        activities = 0
        for group in config.activities:
            domain_id = domain_ids.get(group.domain_name)
            if domain_id is None:
                logger.warning(f"Skipping activities for unknown domain '{group.domain_name}'")
                continue
            for name in group.activities:
                self.db.create_activity(domain_id=domain_id, name=name)
                activities += 1

        self._create_shop_items(config.shop_items)
        return len(config.domains), activities, len(config.shop_items)

    def _import_v2(self, config: PersonalConfigV2) -> tuple[int, int, int]:
        domain_ids = {}
        for domain in config.domains:
            domain_ids[domain.id] = self.db.create_domain(
                name=domain.name,
                base_rate=domain.base_rate,
                daily_soft_cap_minutes=domain.daily_soft_cap_minutes,
                daily_hard_cap_minutes=domain.daily_hard_cap_minutes,
                external_config_id=domain.id,
                color_hint=domain.color_hint,
                is_active=domain.is_active,
            )

        activities = 0
        for activity in config.activity_library:
            domain_id = domain_ids.get(activity.domain_id)
            if domain_id is None:
                logger.warning(f"Skipping activity '{activity.name}': unknown domain '{activity.domain_id}'")
                continue
            self.db.create_activity(
                domain_id=domain_id,
                name=activity.name,
                external_config_id=activity.id,
                tags=activity.tags,
                rate_override=activity.rate_override,
                deep_work_eligible=activity.deep_work_eligible,
                min_block_minutes=activity.min_block_minutes,
                notes_prompt=activity.notes_prompt,
            )
            activities += 1

        self._create_shop_items(config.shop_items)
        return len(config.domains), activities, len(config.shop_items)

    def _create_shop_items(self, items: list[ShopItemConfig]) -> None:
        for item in items:
            self.db.create_shop_item(
                category=item.category,
                name=item.name,
                price_points=item.price_points,
                cooldown_days=item.cooldown_days,
                requires_review=item.requires_review,
                requirements=item.requirements,
                description=item.description,
                real_cost_estimate=item.real_cost_estimate,
                is_active=item.is_active,
            )

    def _save_settings(
        self,
        config: Union[PersonalConfigV1, PersonalConfigV2],
        document: dict[str, Any],
        imported_at: datetime,
    ) -> None:
        milestones = [m.model_dump() for m in config.bonus_milestones or []]
        is_v2 = isinstance(config, PersonalConfigV2)
        self.db.save_settings(
            AppSettings(
                config_imported=True,
                config_version=config.version,
                config_meta=config.meta if is_v2 else None,
                full_config=document if is_v2 else None,
                bonus_milestones=milestones or None,
                imported_at=imported_at,
            )
        )
