"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic. It is also where derived values
(domain level and multiplier) are computed from their stored source facts.
"""

from lifeledger.domain import entities as domain
from lifeledger.domain.levels import level_and_multiplier
from lifeledger.database.models import (
    Domain as ORMDomain,
    Activity as ORMActivity,
    WorkSession as ORMSession,
    Bonus as ORMBonus,
    ShopItem as ORMShopItem,
    Redemption as ORMRedemption,
    LedgerEntry as ORMLedgerEntry,
    AppSettings as ORMAppSettings,
    ActiveTimer as ORMActiveTimer,
)


def domain_to_domain(orm_domain: ORMDomain) -> domain.Domain:
    """Convert SQLAlchemy Domain model to domain Domain entity."""
    level, multiplier = level_and_multiplier(orm_domain.lifetime_minutes)
    return domain.Domain(
        id=orm_domain.id,
        name=orm_domain.name,
        base_rate=orm_domain.base_rate,
        lifetime_minutes=orm_domain.lifetime_minutes,
        level=level,
        multiplier=multiplier,
        is_active=orm_domain.is_active,
        daily_soft_cap_minutes=orm_domain.daily_soft_cap_minutes,
        daily_hard_cap_minutes=orm_domain.daily_hard_cap_minutes,
        external_config_id=orm_domain.external_config_id,
        color_hint=orm_domain.color_hint,
    )


def activity_to_domain(orm_activity: ORMActivity) -> domain.Activity:
    """Convert SQLAlchemy Activity model to domain Activity entity."""
    return domain.Activity(
        id=orm_activity.id,
        domain_id=orm_activity.domain_id,
        name=orm_activity.name,
        is_active=orm_activity.is_active,
        external_config_id=orm_activity.external_config_id,
        tags=tuple(orm_activity.tags or ()),
        rate_override=orm_activity.rate_override,
        deep_work_eligible=orm_activity.deep_work_eligible,
        min_block_minutes=orm_activity.min_block_minutes,
        notes_prompt=orm_activity.notes_prompt,
    )


def session_to_domain(orm_session: ORMSession) -> domain.Session:
    """Convert SQLAlchemy WorkSession model to domain Session entity."""
    return domain.Session(
        id=orm_session.id,
        start_time=orm_session.start_time,
        end_time=orm_session.end_time,
        duration_minutes=orm_session.duration_minutes,
        domain_id=orm_session.domain_id,
        points_awarded=orm_session.points_awarded,
        source=domain.SessionSource(orm_session.source),
        review_flag=orm_session.review_flag,
        activity_id=orm_session.activity_id,
        notes=orm_session.notes,
    )


def bonus_to_domain(orm_bonus: ORMBonus) -> domain.Bonus:
    """Convert SQLAlchemy Bonus model to domain Bonus entity."""
    return domain.Bonus(
        id=orm_bonus.id,
        timestamp=orm_bonus.timestamp,
        title=orm_bonus.title,
        points=orm_bonus.points,
        notes=orm_bonus.notes,
    )


def shop_item_to_domain(orm_item: ORMShopItem) -> domain.ShopItem:
    """Convert SQLAlchemy ShopItem model to domain ShopItem entity."""
    return domain.ShopItem(
        id=orm_item.id,
        category=orm_item.category,
        name=orm_item.name,
        price_points=orm_item.price_points,
        requires_review=orm_item.requires_review,
        is_active=orm_item.is_active,
        cooldown_days=orm_item.cooldown_days,
        requirements=tuple(orm_item.requirements or ()),
        description=orm_item.description,
        real_cost_estimate=orm_item.real_cost_estimate,
    )


def redemption_to_domain(orm_redemption: ORMRedemption) -> domain.Redemption:
    """Convert SQLAlchemy Redemption model to domain Redemption entity."""
    return domain.Redemption(
        id=orm_redemption.id,
        timestamp=orm_redemption.timestamp,
        shop_item_id=orm_redemption.shop_item_id,
        price_points=orm_redemption.price_points,
        notes=orm_redemption.notes,
    )


def ledger_entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    return domain.LedgerEntry(
        id=orm_entry.id,
        timestamp=orm_entry.timestamp,
        type=domain.LedgerEntryType(orm_entry.type),
        points_delta=orm_entry.points_delta,
        reference_id=orm_entry.reference_id,
        description=orm_entry.description,
    )


def settings_to_domain(orm_settings: ORMAppSettings) -> domain.AppSettings:
    """Convert SQLAlchemy AppSettings model to domain AppSettings entity."""
    return domain.AppSettings(
        config_imported=orm_settings.config_imported,
        config_version=orm_settings.config_version,
        config_meta=orm_settings.config_meta,
        full_config=orm_settings.full_config,
        bonus_milestones=orm_settings.bonus_milestones,
        imported_at=orm_settings.imported_at,
    )


def active_timer_to_domain(orm_timer: ORMActiveTimer) -> domain.ActiveTimer:
    """Convert SQLAlchemy ActiveTimer model to domain ActiveTimer entity."""
    return domain.ActiveTimer(
        domain_id=orm_timer.domain_id,
        started_at=orm_timer.started_at,
        activity_id=orm_timer.activity_id,
        paused_at=orm_timer.paused_at,
        total_paused_seconds=orm_timer.total_paused_seconds,
    )


def domain_to_orm(entity: domain.Domain) -> ORMDomain:
    """Convert a domain Domain entity to a SQLAlchemy model, keeping its ID.

    Level and multiplier are dropped; they are recomputed on read.
    """
    return ORMDomain(
        id=entity.id,
        external_config_id=entity.external_config_id,
        name=entity.name,
        base_rate=entity.base_rate,
        lifetime_minutes=entity.lifetime_minutes,
        daily_soft_cap_minutes=entity.daily_soft_cap_minutes,
        daily_hard_cap_minutes=entity.daily_hard_cap_minutes,
        color_hint=entity.color_hint,
        is_active=entity.is_active,
    )


def activity_to_orm(entity: domain.Activity) -> ORMActivity:
    """Convert a domain Activity entity to a SQLAlchemy model, keeping its ID."""
    return ORMActivity(
        id=entity.id,
        domain_id=entity.domain_id,
        external_config_id=entity.external_config_id,
        name=entity.name,
        tags=list(entity.tags) or None,
        rate_override=entity.rate_override,
        deep_work_eligible=entity.deep_work_eligible,
        min_block_minutes=entity.min_block_minutes,
        notes_prompt=entity.notes_prompt,
        is_active=entity.is_active,
    )


def session_to_orm(entity: domain.Session) -> ORMSession:
    """Convert a domain Session entity to a SQLAlchemy model, keeping its ID."""
    return ORMSession(
        id=entity.id,
        start_time=entity.start_time,
        end_time=entity.end_time,
        duration_minutes=entity.duration_minutes,
        domain_id=entity.domain_id,
        activity_id=entity.activity_id,
        points_awarded=entity.points_awarded,
        source=entity.source.value,
        review_flag=entity.review_flag,
        notes=entity.notes,
    )


def bonus_to_orm(entity: domain.Bonus) -> ORMBonus:
    """Convert a domain Bonus entity to a SQLAlchemy model, keeping its ID."""
    return ORMBonus(
        id=entity.id,
        timestamp=entity.timestamp,
        title=entity.title,
        points=entity.points,
        notes=entity.notes,
    )


def shop_item_to_orm(entity: domain.ShopItem) -> ORMShopItem:
    """Convert a domain ShopItem entity to a SQLAlchemy model, keeping its ID."""
    return ORMShopItem(
        id=entity.id,
        category=entity.category,
        name=entity.name,
        price_points=entity.price_points,
        cooldown_days=entity.cooldown_days,
        requires_review=entity.requires_review,
        requirements=list(entity.requirements) or None,
        description=entity.description,
        real_cost_estimate=entity.real_cost_estimate,
        is_active=entity.is_active,
    )


def redemption_to_orm(entity: domain.Redemption) -> ORMRedemption:
    """Convert a domain Redemption entity to a SQLAlchemy model, keeping its ID."""
    return ORMRedemption(
        id=entity.id,
        timestamp=entity.timestamp,
        shop_item_id=entity.shop_item_id,
        price_points=entity.price_points,
        notes=entity.notes,
    )


def ledger_entry_to_orm(entity: domain.LedgerEntry) -> ORMLedgerEntry:
    """Convert a domain LedgerEntry entity to a SQLAlchemy model, keeping its ID."""
    return ORMLedgerEntry(
        id=entity.id,
        timestamp=entity.timestamp,
        type=entity.type.value,
        points_delta=entity.points_delta,
        reference_id=entity.reference_id,
        description=entity.description,
    )


TO_ORM = {
    domain.Domain: domain_to_orm,
    domain.Activity: activity_to_orm,
    domain.Session: session_to_orm,
    domain.Bonus: bonus_to_orm,
    domain.ShopItem: shop_item_to_orm,
    domain.Redemption: redemption_to_orm,
    domain.LedgerEntry: ledger_entry_to_orm,
}
