"""SQLAlchemy models for lifeledger database."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from lifeledger.domain.constants import DEFAULT_DAILY_SOFT_CAP_MINUTES

Base = declarative_base()


class Domain(Base):
    """Productivity domain model.

    Level and multiplier are not columns: they are derived from
    lifetime_minutes when mapping to the domain entity.
    """

    __tablename__ = "domains"

    id = Column(Integer, primary_key=True)
    external_config_id = Column(String, nullable=True)
    name = Column(String, nullable=False)
    base_rate = Column(Float, nullable=False)
    lifetime_minutes = Column(Integer, default=0, nullable=False)
    daily_soft_cap_minutes = Column(Integer, default=DEFAULT_DAILY_SOFT_CAP_MINUTES, nullable=False)
    daily_hard_cap_minutes = Column(Integer, nullable=True)
    color_hint = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    activities = relationship("Activity", back_populates="domain")


class Activity(Base):
    """Activity model, owned by a single domain."""

    __tablename__ = "activities"

    id = Column(Integer, primary_key=True)
    domain_id = Column(Integer, ForeignKey("domains.id"), nullable=False, index=True)
    external_config_id = Column(String, nullable=True)
    name = Column(String, nullable=False)
    tags = Column(JSON, nullable=True)
    rate_override = Column(Float, nullable=True)
    deep_work_eligible = Column(Boolean, nullable=True)
    min_block_minutes = Column(Integer, nullable=True)
    notes_prompt = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    # Relationships
    domain = relationship("Domain", back_populates="activities")


class WorkSession(Base):
    """Work session model.

    domain_id is a plain column: replacing the catalog never touches history.
    """

    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    domain_id = Column(Integer, nullable=False, index=True)
    activity_id = Column(Integer, nullable=True)
    points_awarded = Column(Integer, nullable=False)
    source = Column(String, nullable=False)
    review_flag = Column(Boolean, default=False, nullable=False)
    notes = Column(String, nullable=True)


class Bonus(Base):
    """Bonus award model."""

    __tablename__ = "bonuses"

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    title = Column(String, nullable=False)
    points = Column(Integer, nullable=False)
    notes = Column(String, nullable=True)


class ShopItem(Base):
    """Shop catalog item model."""

    __tablename__ = "shop_items"

    id = Column(Integer, primary_key=True)
    category = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    price_points = Column(Integer, nullable=False)
    cooldown_days = Column(Integer, nullable=True)
    requires_review = Column(Boolean, default=False, nullable=False)
    requirements = Column(JSON, nullable=True)
    description = Column(String, nullable=True)
    real_cost_estimate = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)


class Redemption(Base):
    """Redemption history model."""

    __tablename__ = "redemptions"

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    shop_item_id = Column(Integer, nullable=False, index=True)
    price_points = Column(Integer, nullable=False)
    notes = Column(String, nullable=True)


class LedgerEntry(Base):
    """Append-only ledger model."""

    __tablename__ = "ledger"

    id = Column(Integer, primary_key=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    type = Column(String, nullable=False, index=True)
    points_delta = Column(Integer, nullable=False)
    reference_id = Column(Integer, nullable=False)
    description = Column(String, nullable=False)


class AppSettings(Base):
    """Single-row application settings model."""

    __tablename__ = "app_settings"

    id = Column(Integer, primary_key=True)
    config_imported = Column(Boolean, default=False, nullable=False)
    config_version = Column(Integer, nullable=True)
    config_meta = Column(JSON, nullable=True)
    full_config = Column(JSON, nullable=True)
    bonus_milestones = Column(JSON, nullable=True)
    imported_at = Column(DateTime, nullable=True)


class ActiveTimer(Base):
    """Single-row running timer model."""

    __tablename__ = "active_timer"

    id = Column(Integer, primary_key=True)
    domain_id = Column(Integer, nullable=False)
    activity_id = Column(Integer, nullable=True)
    started_at = Column(DateTime, nullable=False)
    paused_at = Column(DateTime, nullable=True)
    total_paused_seconds = Column(Integer, default=0, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
