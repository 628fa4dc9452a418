"""Generic SQLAlchemy database implementation."""

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Optional, Sequence
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from lifeledger.database.base import Database
from lifeledger.database.models import (
    ActiveTimer,
    Activity,
    AppSettings,
    Bonus,
    Domain,
    LedgerEntry,
    Redemption,
    ShopItem,
    WorkSession,
    create_session_factory,
)
from lifeledger.database.mappers import (
    TO_ORM,
    active_timer_to_domain,
    activity_to_domain,
    bonus_to_domain,
    domain_to_domain,
    ledger_entry_to_domain,
    redemption_to_domain,
    session_to_domain,
    settings_to_domain,
    shop_item_to_domain,
)
from lifeledger.domain import entities
from lifeledger.domain.errors import (
    PersistenceFailure,
    activity_not_found,
    domain_not_found,
    shop_item_not_found,
)

EARNING_TYPES = (
    entities.LedgerEntryType.EARN_SESSION.value,
    entities.LedgerEntryType.EARN_BONUS.value,
)


class SQLAlchemyDatabase(Database):
    """SQLAlchemy-based implementation of Database interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None
        self._transaction_depth = 0

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def _commit(self) -> None:
        """Commit, or only flush when running inside transaction()."""
        session = self._get_session()
        try:
            if self._transaction_depth > 0:
                session.flush()
            else:
                session.commit()
        except SQLAlchemyError as e:
            if self._transaction_depth == 0:
                session.rollback()
            raise PersistenceFailure(str(e)) from e

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run the enclosed writes as one unit of work."""
        session = self._get_session()
        if self._transaction_depth > 0:
            self._transaction_depth += 1
            try:
                yield
            finally:
                self._transaction_depth -= 1
            return

        self._transaction_depth = 1
        try:
            yield
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise PersistenceFailure(str(e)) from e
        except BaseException:
            session.rollback()
            raise
        finally:
            self._transaction_depth = 0

    # Settings operations
    def get_settings(self) -> Optional[entities.AppSettings]:
        """Get the settings record."""
        session = self._get_session()
        row = session.query(AppSettings).first()
        if row is None:
            return None
        return settings_to_domain(row)

    def save_settings(self, settings: entities.AppSettings) -> None:
        """Create or replace the settings record."""
        session = self._get_session()
        row = session.query(AppSettings).first()
        if row is None:
            row = AppSettings()
            session.add(row)
        row.config_imported = settings.config_imported
        row.config_version = settings.config_version
        row.config_meta = settings.config_meta
        row.full_config = settings.full_config
        row.bonus_milestones = settings.bonus_milestones
        row.imported_at = settings.imported_at
        self._commit()

    # Domain operations
    def create_domain(
        self,
        name: str,
        base_rate: float,
        daily_soft_cap_minutes: int,
        daily_hard_cap_minutes: Optional[int] = None,
        external_config_id: Optional[str] = None,
        color_hint: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a domain. Returns domain ID."""
        session = self._get_session()
        domain = Domain(
            name=name,
            base_rate=base_rate,
            lifetime_minutes=0,
            daily_soft_cap_minutes=daily_soft_cap_minutes,
            daily_hard_cap_minutes=daily_hard_cap_minutes,
            external_config_id=external_config_id,
            color_hint=color_hint,
            is_active=is_active,
        )
        session.add(domain)
        self._commit()
        return domain.id

    def get_domain(self, domain_id: int) -> Optional[entities.Domain]:
        """Get domain by ID."""
        session = self._get_session()
        domain = session.query(Domain).filter(Domain.id == domain_id).first()
        if domain is None:
            return None
        return domain_to_domain(domain)

    def list_domains(self, active_only: bool = False) -> list[entities.Domain]:
        """List domains in creation order."""
        session = self._get_session()
        query = session.query(Domain)
        if active_only:
            query = query.filter(Domain.is_active.is_(True))
        return [domain_to_domain(d) for d in query.order_by(Domain.id).all()]

    def update_domain_lifetime(self, domain_id: int, lifetime_minutes: int) -> None:
        """Set a domain's lifetime minutes."""
        session = self._get_session()
        domain = session.query(Domain).filter(Domain.id == domain_id).first()
        if domain is None:
            raise ValueError(domain_not_found(domain_id))
        domain.lifetime_minutes = lifetime_minutes
        self._commit()

    def set_domain_active(self, domain_id: int, is_active: bool) -> None:
        """Toggle domain activation."""
        session = self._get_session()
        domain = session.query(Domain).filter(Domain.id == domain_id).first()
        if domain is None:
            raise ValueError(domain_not_found(domain_id))
        domain.is_active = is_active
        self._commit()

    # Activity operations
    def create_activity(
        self,
        domain_id: int,
        name: str,
        external_config_id: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        rate_override: Optional[float] = None,
        deep_work_eligible: Optional[bool] = None,
        min_block_minutes: Optional[int] = None,
        notes_prompt: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create an activity. Returns activity ID."""
        session = self._get_session()
        activity = Activity(
            domain_id=domain_id,
            name=name,
            external_config_id=external_config_id,
            tags=list(tags) if tags else None,
            rate_override=rate_override,
            deep_work_eligible=deep_work_eligible,
            min_block_minutes=min_block_minutes,
            notes_prompt=notes_prompt,
            is_active=is_active,
        )
        session.add(activity)
        self._commit()
        return activity.id

    def get_activity(self, activity_id: int) -> Optional[entities.Activity]:
        """Get activity by ID."""
        session = self._get_session()
        activity = session.query(Activity).filter(Activity.id == activity_id).first()
        if activity is None:
            return None
        return activity_to_domain(activity)

    def list_activities(
        self, domain_id: Optional[int] = None, active_only: bool = False
    ) -> list[entities.Activity]:
        """List activities, optionally filtered by domain."""
        session = self._get_session()
        query = session.query(Activity)
        if domain_id is not None:
            query = query.filter(Activity.domain_id == domain_id)
        if active_only:
            query = query.filter(Activity.is_active.is_(True))
        return [activity_to_domain(a) for a in query.order_by(Activity.id).all()]

    def set_activity_active(self, activity_id: int, is_active: bool) -> None:
        """Toggle activity activation."""
        session = self._get_session()
        activity = session.query(Activity).filter(Activity.id == activity_id).first()
        if activity is None:
            raise ValueError(activity_not_found(activity_id))
        activity.is_active = is_active
        self._commit()

    # Shop operations
    def create_shop_item(
        self,
        category: str,
        name: str,
        price_points: int,
        cooldown_days: Optional[int] = None,
        requires_review: bool = False,
        requirements: Optional[Sequence[str]] = None,
        description: Optional[str] = None,
        real_cost_estimate: Optional[str] = None,
        is_active: bool = True,
    ) -> int:
        """Create a shop item. Returns item ID."""
        session = self._get_session()
        item = ShopItem(
            category=category,
            name=name,
            price_points=price_points,
            cooldown_days=cooldown_days,
            requires_review=requires_review,
            requirements=list(requirements) if requirements else None,
            description=description,
            real_cost_estimate=real_cost_estimate,
            is_active=is_active,
        )
        session.add(item)
        self._commit()
        return item.id

    def get_shop_item(self, item_id: int) -> Optional[entities.ShopItem]:
        """Get shop item by ID."""
        session = self._get_session()
        item = session.query(ShopItem).filter(ShopItem.id == item_id).first()
        if item is None:
            return None
        return shop_item_to_domain(item)

    def list_shop_items(
        self, category: Optional[str] = None, active_only: bool = False
    ) -> list[entities.ShopItem]:
        """List shop items ordered by category and price."""
        session = self._get_session()
        query = session.query(ShopItem)
        if category is not None:
            query = query.filter(ShopItem.category == category)
        if active_only:
            query = query.filter(ShopItem.is_active.is_(True))
        items = query.order_by(ShopItem.category, ShopItem.price_points, ShopItem.id).all()
        return [shop_item_to_domain(i) for i in items]

    def set_shop_item_active(self, item_id: int, is_active: bool) -> None:
        """Toggle shop item activation."""
        session = self._get_session()
        item = session.query(ShopItem).filter(ShopItem.id == item_id).first()
        if item is None:
            raise ValueError(shop_item_not_found(item_id))
        item.is_active = is_active
        self._commit()

    def clear_catalog(self) -> None:
        """Delete all domains, activities and shop items."""
        session = self._get_session()
        session.query(Activity).delete(synchronize_session=False)
        session.query(Domain).delete(synchronize_session=False)
        session.query(ShopItem).delete(synchronize_session=False)
        session.expire_all()
        self._commit()

    # Session operations
    def create_session(
        self,
        start_time: datetime,
        end_time: datetime,
        duration_minutes: int,
        domain_id: int,
        points_awarded: int,
        source: entities.SessionSource,
        review_flag: bool,
        activity_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create a session. Returns session ID."""
        session = self._get_session()
        work_session = WorkSession(
            start_time=start_time,
            end_time=end_time,
            duration_minutes=duration_minutes,
            domain_id=domain_id,
            activity_id=activity_id,
            points_awarded=points_awarded,
            source=source.value,
            review_flag=review_flag,
            notes=notes,
        )
        session.add(work_session)
        self._commit()
        return work_session.id

    def get_session(self, session_id: int) -> Optional[entities.Session]:
        """Get session by ID."""
        session = self._get_session()
        work_session = session.query(WorkSession).filter(WorkSession.id == session_id).first()
        if work_session is None:
            return None
        return session_to_domain(work_session)

    def list_sessions(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        domain_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[entities.Session]:
        """List sessions newest first."""
        session = self._get_session()
        query = session.query(WorkSession)
        if start is not None:
            query = query.filter(WorkSession.start_time >= start)
        if end is not None:
            query = query.filter(WorkSession.start_time < end)
        if domain_id is not None:
            query = query.filter(WorkSession.domain_id == domain_id)
        query = query.order_by(WorkSession.start_time.desc(), WorkSession.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [session_to_domain(s) for s in query.all()]

    def sum_session_minutes(self, start: datetime, end: datetime, domain_id: Optional[int] = None) -> int:
        """Sum durations of sessions that started in [start, end)."""
        session = self._get_session()
        query = session.query(func.coalesce(func.sum(WorkSession.duration_minutes), 0)).filter(
            WorkSession.start_time >= start, WorkSession.start_time < end
        )
        if domain_id is not None:
            query = query.filter(WorkSession.domain_id == domain_id)
        return int(query.scalar())

    # Bonus operations
    def create_bonus(self, timestamp: datetime, title: str, points: int, notes: Optional[str] = None) -> int:
        """Create a bonus. Returns bonus ID."""
        session = self._get_session()
        bonus = Bonus(timestamp=timestamp, title=title, points=points, notes=notes)
        session.add(bonus)
        self._commit()
        return bonus.id

    def list_bonuses(self) -> list[entities.Bonus]:
        """List bonuses newest first."""
        session = self._get_session()
        bonuses = session.query(Bonus).order_by(Bonus.timestamp.desc(), Bonus.id.desc()).all()
        return [bonus_to_domain(b) for b in bonuses]

    def delete_bonus(self, bonus_id: int) -> None:
        """Delete a bonus."""
        session = self._get_session()
        session.query(Bonus).filter(Bonus.id == bonus_id).delete(synchronize_session=False)
        self._commit()

    # Redemption operations
    def create_redemption(
        self, timestamp: datetime, shop_item_id: int, price_points: int, notes: Optional[str] = None
    ) -> int:
        """Create a redemption. Returns redemption ID."""
        session = self._get_session()
        redemption = Redemption(
            timestamp=timestamp, shop_item_id=shop_item_id, price_points=price_points, notes=notes
        )
        session.add(redemption)
        self._commit()
        return redemption.id

    def get_redemption(self, redemption_id: int) -> Optional[entities.Redemption]:
        """Get redemption by ID."""
        session = self._get_session()
        redemption = session.query(Redemption).filter(Redemption.id == redemption_id).first()
        if redemption is None:
            return None
        return redemption_to_domain(redemption)

    def list_redemptions(
        self, shop_item_id: Optional[int] = None, limit: Optional[int] = None
    ) -> list[entities.Redemption]:
        """List redemptions newest first."""
        session = self._get_session()
        query = session.query(Redemption)
        if shop_item_id is not None:
            query = query.filter(Redemption.shop_item_id == shop_item_id)
        query = query.order_by(Redemption.timestamp.desc(), Redemption.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [redemption_to_domain(r) for r in query.all()]

    def count_redemptions(self, shop_item_id: int) -> int:
        """Count redemptions of a shop item."""
        session = self._get_session()
        return session.query(Redemption).filter(Redemption.shop_item_id == shop_item_id).count()

    def delete_redemption(self, redemption_id: int) -> None:
        """Delete a redemption."""
        session = self._get_session()
        session.query(Redemption).filter(Redemption.id == redemption_id).delete(synchronize_session=False)
        self._commit()

    # Ledger operations
    def create_ledger_entry(
        self,
        timestamp: datetime,
        entry_type: entities.LedgerEntryType,
        points_delta: int,
        reference_id: int,
        description: str,
    ) -> int:
        """Append a ledger entry. Returns entry ID."""
        session = self._get_session()
        entry = LedgerEntry(
            timestamp=timestamp,
            type=entry_type.value,
            points_delta=points_delta,
            reference_id=reference_id,
            description=description,
        )
        session.add(entry)
        self._commit()
        return entry.id

    def list_ledger_entries(
        self,
        entry_type: Optional[entities.LedgerEntryType] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[entities.LedgerEntry]:
        """List ledger entries newest first."""
        session = self._get_session()
        query = session.query(LedgerEntry)
        if entry_type is not None:
            query = query.filter(LedgerEntry.type == entry_type.value)
        if start is not None:
            query = query.filter(LedgerEntry.timestamp >= start)
        if end is not None:
            query = query.filter(LedgerEntry.timestamp < end)
        query = query.order_by(LedgerEntry.timestamp.desc(), LedgerEntry.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [ledger_entry_to_domain(e) for e in query.all()]

    def sum_points_delta(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        earnings_only: bool = False,
    ) -> int:
        """Sum points deltas of ledger entries."""
        session = self._get_session()
        query = session.query(func.coalesce(func.sum(LedgerEntry.points_delta), 0))
        if start is not None:
            query = query.filter(LedgerEntry.timestamp >= start)
        if end is not None:
            query = query.filter(LedgerEntry.timestamp < end)
        if earnings_only:
            query = query.filter(LedgerEntry.type.in_(EARNING_TYPES))
        return int(query.scalar())

    def delete_ledger_entry(self, entry_id: int) -> None:
        """Delete a ledger entry."""
        session = self._get_session()
        session.query(LedgerEntry).filter(LedgerEntry.id == entry_id).delete(synchronize_session=False)
        self._commit()

    # Active timer operations
    def get_active_timer(self) -> Optional[entities.ActiveTimer]:
        """Get the running or paused timer."""
        session = self._get_session()
        row = session.query(ActiveTimer).first()
        if row is None:
            return None
        return active_timer_to_domain(row)

    def save_active_timer(self, timer: entities.ActiveTimer) -> None:
        """Create or replace the active timer."""
        session = self._get_session()
        row = session.query(ActiveTimer).first()
        if row is None:
            row = ActiveTimer()
            session.add(row)
        row.domain_id = timer.domain_id
        row.activity_id = timer.activity_id
        row.started_at = timer.started_at
        row.paused_at = timer.paused_at
        row.total_paused_seconds = timer.total_paused_seconds
        self._commit()

    def clear_active_timer(self) -> None:
        """Remove the active timer."""
        session = self._get_session()
        session.query(ActiveTimer).delete(synchronize_session=False)
        self._commit()

    # Backup operations
    def export_tables(self) -> dict[str, list[Any]]:
        """Return every record of every table in ID order."""
        session = self._get_session()
        return {
            "domains": [domain_to_domain(r) for r in session.query(Domain).order_by(Domain.id)],
            "activities": [activity_to_domain(r) for r in session.query(Activity).order_by(Activity.id)],
            "sessions": [session_to_domain(r) for r in session.query(WorkSession).order_by(WorkSession.id)],
            "bonuses": [bonus_to_domain(r) for r in session.query(Bonus).order_by(Bonus.id)],
            "shop_items": [shop_item_to_domain(r) for r in session.query(ShopItem).order_by(ShopItem.id)],
            "redemptions": [redemption_to_domain(r) for r in session.query(Redemption).order_by(Redemption.id)],
            "ledger": [ledger_entry_to_domain(r) for r in session.query(LedgerEntry).order_by(LedgerEntry.id)],
        }

    def bulk_insert(self, records: Sequence[Any]) -> None:
        """Insert domain entities verbatim, keeping their IDs."""
        session = self._get_session()
        for record in records:
            to_orm = TO_ORM.get(type(record))
            if to_orm is None:
                raise TypeError(f"Cannot insert record of type {type(record).__name__}")
            session.add(to_orm(record))
        self._commit()

    def clear_all(self) -> None:
        """Delete every record of every table."""
        session = self._get_session()
        for model in (
            Activity,
            Domain,
            ShopItem,
            WorkSession,
            Bonus,
            Redemption,
            LedgerEntry,
            AppSettings,
            ActiveTimer,
        ):
            session.query(model).delete(synchronize_session=False)
        session.expire_all()
        self._commit()
