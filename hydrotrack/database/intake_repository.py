"""Repository for water intake (ledger) database operations."""

import logging
from datetime import date, datetime, time
from typing import List, Optional, Tuple
from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from hydrotrack.models.intake import IntakeRecord
from hydrotrack.database.models import WaterIntakeDB

logger = logging.getLogger(__name__)
_UNSET = object()


class IntakeRepository:
    """Repository for IntakeRecord database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: int, amount: int, intake_date: date, intake_time: time) -> IntakeRecord:
        """Create a new intake record."""
        try:
            record_db = WaterIntakeDB(
                user_id=user_id,
                amount=amount,
                date=intake_date,
                time=intake_time,
            )
            self.db.add(record_db)
            self.db.commit()
            self.db.refresh(record_db)
            logger.debug(f"Created intake {record_db.id} for user {user_id}: {amount} ml")
            return record_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create intake for user {user_id}: {type(e).__name__}: {str(e)}")
            raise

    def log_now(self, user_id: int, amount: int, now: Optional[datetime] = None) -> IntakeRecord:
        """Log an intake stamped with the server's current local date and time."""
        now = (now or datetime.now()).replace(microsecond=0)
        return self.create(user_id, amount, now.date(), now.time())

    def get(self, record_id: int) -> Optional[IntakeRecord]:
        """Get a record by ID."""
        record_db = self.db.query(WaterIntakeDB).filter(WaterIntakeDB.id == record_id).first()
        return record_db.to_pydantic() if record_db else None

    def list_for_user(self, user_id: int) -> List[IntakeRecord]:
        """All records for a user, newest first."""
        records_db = (
            self.db.query(WaterIntakeDB)
            .filter(WaterIntakeDB.user_id == user_id)
            .order_by(desc(WaterIntakeDB.date), desc(WaterIntakeDB.time), desc(WaterIntakeDB.id))
            .all()
        )
        return [record_db.to_pydantic() for record_db in records_db]

    def list_for_user_on_date(self, user_id: int, on_date: date) -> List[IntakeRecord]:
        """Records for a user on one date, ordered by time ascending."""
        records_db = (
            self.db.query(WaterIntakeDB)
            .filter(WaterIntakeDB.user_id == user_id, WaterIntakeDB.date == on_date)
            .order_by(WaterIntakeDB.time, WaterIntakeDB.id)
            .all()
        )
        return [record_db.to_pydantic() for record_db in records_db]

    def list_for_user_in_range(self, user_id: int, start: date, end: date) -> List[IntakeRecord]:
        """Records for a user with start <= date <= end, ordered by (date, time) ascending."""
        records_db = (
            self.db.query(WaterIntakeDB)
            .filter(
                WaterIntakeDB.user_id == user_id,
                WaterIntakeDB.date >= start,
                WaterIntakeDB.date <= end,
            )
            .order_by(WaterIntakeDB.date, WaterIntakeDB.time, WaterIntakeDB.id)
            .all()
        )
        return [record_db.to_pydantic() for record_db in records_db]

    def daily_totals(self, user_id: int, start: date, end: date) -> List[Tuple[date, int]]:
        """Grouped SUM(amount) per date within [start, end], newest date first."""
        rows = (
            self.db.query(WaterIntakeDB.date, func.sum(WaterIntakeDB.amount))
            .filter(
                WaterIntakeDB.user_id == user_id,
                WaterIntakeDB.date >= start,
                WaterIntakeDB.date <= end,
            )
            .group_by(WaterIntakeDB.date)
            .order_by(desc(WaterIntakeDB.date))
            .all()
        )
        return [(row_date, int(total or 0)) for row_date, total in rows]

    def update(self, record_id: int, *, amount=_UNSET, intake_time=_UNSET) -> Optional[IntakeRecord]:
        """Update amount and/or time of a record.

        Uses an UNSET sentinel so callers only touch the fields they pass.
        """
        record_db = self.db.query(WaterIntakeDB).filter(WaterIntakeDB.id == record_id).first()
        if record_db is None:
            return None

        if amount is not _UNSET:
            record_db.amount = amount
        if intake_time is not _UNSET:
            record_db.time = intake_time

        try:
            self.db.commit()
            self.db.refresh(record_db)
            logger.debug(f"Updated intake {record_id}")
            return record_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update intake {record_id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, record_id: int) -> bool:
        """Delete a record by ID."""
        record_db = self.db.query(WaterIntakeDB).filter(WaterIntakeDB.id == record_id).first()
        if not record_db:
            return False

        try:
            self.db.delete(record_db)
            self.db.commit()
            logger.debug(f"Deleted intake {record_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete intake {record_id}: {type(e).__name__}: {str(e)}")
            raise
