"""Pydantic models for external JSON documents.

Two kinds of document cross the application boundary: the personal
configuration (two schema versions, told apart by their ``version`` field)
and the full data backup. Both use camelCase keys on the wire.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from lifeledger.domain import entities
from lifeledger.domain.constants import DEFAULT_DAILY_SOFT_CAP_MINUTES
from lifeledger.domain.ledger import validate_entry_sign


def _to_local(value: datetime) -> datetime:
    # Epoch numbers and offset strings come back timezone aware
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


LocalDateTime = Annotated[datetime, AfterValidator(_to_local)]


class CamelModel(BaseModel):
    """Base model reading and writing camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


# Personal configuration documents


class ShopItemConfig(CamelModel):
    category: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    price_points: int = Field(..., gt=0)
    description: Optional[str] = None
    cooldown_days: Optional[int] = Field(None, ge=0)
    requires_review: bool = False
    requirements: list[str] = Field(default_factory=list)
    real_cost_estimate: Optional[str] = None
    is_active: bool = True


class BonusMilestone(CamelModel):
    title: str = Field(..., min_length=1)
    points: int = Field(..., gt=0)


class DomainConfigV1(CamelModel):
    name: str = Field(..., min_length=1)
    base_rate: float = Field(..., gt=0)
    daily_soft_cap_minutes: int = Field(DEFAULT_DAILY_SOFT_CAP_MINUTES, ge=0)
    is_active: bool = True


class ActivityGroupV1(CamelModel):
    domain_name: str
    activities: list[str] = Field(default_factory=list)


class PersonalConfigV1(CamelModel):
    """Simple schema: domains keyed by name, activities grouped by domain name."""

    version: Literal[1]
    domains: list[DomainConfigV1]
    activities: list[ActivityGroupV1]
    shop_items: list[ShopItemConfig]
    bonus_milestones: list[BonusMilestone] = Field(default_factory=list)


class DomainConfigV2(CamelModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    base_rate: float = Field(..., gt=0)
    daily_soft_cap_minutes: int = Field(DEFAULT_DAILY_SOFT_CAP_MINUTES, ge=0)
    daily_hard_cap_minutes: Optional[int] = Field(None, ge=0)
    color_hint: Optional[str] = None
    is_active: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v


class ActivityConfigV2(CamelModel):
    id: str = Field(..., min_length=1)
    domain_id: str
    name: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)
    rate_override: Optional[float] = None
    deep_work_eligible: Optional[bool] = None
    min_block_minutes: Optional[int] = Field(None, ge=0)
    notes_prompt: Optional[str] = None

    @field_validator("id", "domain_id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v


class PersonalConfigV2(CamelModel):
    """Detailed schema: domains and activities carry opaque string ids."""

    version: Literal[2]
    meta: Optional[dict[str, Any]] = None
    economy: Optional[dict[str, Any]] = None
    domains: list[DomainConfigV2]
    activity_library: list[ActivityConfigV2]
    shop_items: list[ShopItemConfig]
    bonus_milestones: Optional[list[BonusMilestone]] = None
    requirements_library: Optional[Any] = None


PersonalConfig = Annotated[
    Union[PersonalConfigV1, PersonalConfigV2],
    Field(discriminator="version"),
]

personal_config_adapter = TypeAdapter(PersonalConfig)


# Backup documents


class DomainRecord(CamelModel):
    id: int
    name: str
    base_rate: float
    lifetime_minutes: int = Field(0, ge=0)
    # Derived; written for reference and ignored on restore
    level: Optional[int] = None
    multiplier: Optional[float] = None
    is_active: bool = True
    daily_soft_cap_minutes: Optional[int] = None
    daily_hard_cap_minutes: Optional[int] = None
    external_config_id: Optional[str] = Field(None, alias="configId")
    color_hint: Optional[str] = None

    def to_entity(self) -> entities.Domain:
        return entities.Domain(
            id=self.id,
            name=self.name,
            base_rate=self.base_rate,
            lifetime_minutes=self.lifetime_minutes,
            level=1,
            multiplier=1.0,
            is_active=self.is_active,
            daily_soft_cap_minutes=(
                self.daily_soft_cap_minutes
                if self.daily_soft_cap_minutes is not None
                else DEFAULT_DAILY_SOFT_CAP_MINUTES
            ),
            daily_hard_cap_minutes=self.daily_hard_cap_minutes,
            external_config_id=self.external_config_id,
            color_hint=self.color_hint,
        )


class ActivityRecord(CamelModel):
    id: int
    domain_id: int
    name: str
    is_active: bool = True
    external_config_id: Optional[str] = Field(None, alias="configId")
    tags: Optional[list[str]] = None
    rate_override: Optional[float] = None
    deep_work_eligible: Optional[bool] = None
    min_block_minutes: Optional[int] = None
    notes_prompt: Optional[str] = None

    def to_entity(self) -> entities.Activity:
        return entities.Activity(
            id=self.id,
            domain_id=self.domain_id,
            name=self.name,
            is_active=self.is_active,
            external_config_id=self.external_config_id,
            tags=tuple(self.tags or ()),
            rate_override=self.rate_override,
            deep_work_eligible=self.deep_work_eligible,
            min_block_minutes=self.min_block_minutes,
            notes_prompt=self.notes_prompt,
        )


class SessionRecord(CamelModel):
    id: int
    start_time: LocalDateTime
    end_time: LocalDateTime
    duration_minutes: int = Field(..., ge=0)
    domain_id: int
    activity_id: Optional[int] = None
    points_awarded: int = Field(..., ge=0)
    source: entities.SessionSource
    review_flag: bool = False
    notes: Optional[str] = None

    def to_entity(self) -> entities.Session:
        return entities.Session(**self.model_dump())


class BonusRecord(CamelModel):
    id: int
    timestamp: LocalDateTime
    title: str
    points: int
    notes: Optional[str] = None

    def to_entity(self) -> entities.Bonus:
        return entities.Bonus(**self.model_dump())


class ShopItemRecord(CamelModel):
    id: int
    category: str
    name: str
    price_points: int = Field(..., gt=0)
    requires_review: bool = False
    is_active: bool = True
    cooldown_days: Optional[int] = None
    requirements: Optional[list[str]] = None
    description: Optional[str] = None
    real_cost_estimate: Optional[str] = None

    def to_entity(self) -> entities.ShopItem:
        data = self.model_dump()
        data["requirements"] = tuple(self.requirements or ())
        return entities.ShopItem(**data)


class RedemptionRecord(CamelModel):
    id: int
    timestamp: LocalDateTime
    shop_item_id: int
    price_points: int
    notes: Optional[str] = None

    def to_entity(self) -> entities.Redemption:
        return entities.Redemption(**self.model_dump())


class LedgerRecord(CamelModel):
    id: int
    timestamp: LocalDateTime
    type: entities.LedgerEntryType
    points_delta: int
    reference_id: int
    description: str = ""

    @model_validator(mode="after")
    def check_sign(self) -> "LedgerRecord":
        validate_entry_sign(self.type, self.points_delta)
        return self

    def to_entity(self) -> entities.LedgerEntry:
        return entities.LedgerEntry(**self.model_dump())


class BackupData(CamelModel):
    domains: list[DomainRecord] = Field(default_factory=list)
    activities: list[ActivityRecord] = Field(default_factory=list)
    sessions: list[SessionRecord] = Field(default_factory=list)
    bonuses: list[BonusRecord] = Field(default_factory=list)
    shop_items: list[ShopItemRecord] = Field(default_factory=list)
    redemptions: list[RedemptionRecord] = Field(default_factory=list)
    ledger: list[LedgerRecord] = Field(default_factory=list)

    def to_entities(self) -> list[Any]:
        """All records as entities, parents before children."""
        return [
            record.to_entity()
            for table in (
                self.domains,
                self.activities,
                self.shop_items,
                self.sessions,
                self.bonuses,
                self.redemptions,
                self.ledger,
            )
            for record in table
        ]


class BackupDocument(CamelModel):
    """Verbatim snapshot of every table."""

    version: int = Field(..., ge=1)
    exported_at: Optional[LocalDateTime] = None
    data: BackupData
