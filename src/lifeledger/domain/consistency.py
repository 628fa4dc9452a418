"""Reconciliation of records against their ledger entries.

Every bonus, redemption and point-earning session must have exactly one
ledger entry referencing it. Writes happen in transactions, so a mismatch
only appears after an interrupted write in an older store or a hand-edited
backup.
"""

import logging

from lifeledger.database.base import Database
from lifeledger.domain.entities import ConsistencyReport, LedgerEntryType

logger = logging.getLogger(__name__)


class ConsistencyService:
    """Detects and repairs record/ledger mismatches."""

    def __init__(self, db: Database):
        """Initialize consistency service.

        Args:
            db: Database instance
        """
        self.db = db

    def check(self) -> ConsistencyReport:
        """Find records without their ledger entry and entries without their record."""
        tables = self.db.export_tables()
        booked = {entry_type: set() for entry_type in LedgerEntryType}
        for entry in tables["ledger"]:
            booked[entry.type].add(entry.reference_id)

        sessions = {s.id for s in tables["sessions"]}
        bonuses = {b.id for b in tables["bonuses"]}
        redemptions = {r.id for r in tables["redemptions"]}
        referenced = {
            LedgerEntryType.EARN_SESSION: sessions,
            LedgerEntryType.EARN_BONUS: bonuses,
            LedgerEntryType.SPEND_SHOP: redemptions,
        }

        return ConsistencyReport(
            orphan_redemption_ids=sorted(redemptions - booked[LedgerEntryType.SPEND_SHOP]),
            orphan_bonus_ids=sorted(bonuses - booked[LedgerEntryType.EARN_BONUS]),
            unbooked_session_ids=sorted(
                s.id
                for s in tables["sessions"]
                if s.points_awarded > 0 and s.id not in booked[LedgerEntryType.EARN_SESSION]
            ),
            dangling_entry_ids=sorted(
                e.id for e in tables["ledger"] if e.reference_id not in referenced[e.type]
            ),
        )

    def repair(self) -> ConsistencyReport:
        """Drop orphaned redemptions, bonuses and dangling ledger entries.

        Sessions without an entry are reported but kept, since their
        minutes already count towards domain progress.

        Returns:
            The report of what was found before repairing
        """
        report = self.check()
        if report.is_consistent:
            return report

        with self.db.transaction():
            for redemption_id in report.orphan_redemption_ids:
                self.db.delete_redemption(redemption_id)
            for bonus_id in report.orphan_bonus_ids:
                self.db.delete_bonus(bonus_id)
            for entry_id in report.dangling_entry_ids:
                self.db.delete_ledger_entry(entry_id)

        logger.info(
            f"Repaired store: dropped {len(report.orphan_redemption_ids)} redemptions, "
            f"{len(report.orphan_bonus_ids)} bonuses, {len(report.dangling_entry_ids)} ledger entries"
        )
        if report.unbooked_session_ids:
            logger.warning(f"Sessions without ledger entries: {report.unbooked_session_ids}")
        return report
