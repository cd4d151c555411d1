"""Data access layer for month snapshots"""

from typing import List, Optional

from sqlalchemy.orm import Session

from household_budget.domain.models import MonthKey, MonthSnapshot
from household_budget.infrastructure.database.models import MonthSnapshotRecord
from household_budget.infrastructure.database.serialization import snapshot_from_payload, snapshot_to_payload


class SqlBudgetPeriodStore:
    """BudgetPeriodStore backed by the month_snapshot table. The caller owns commit/rollback."""

    def __init__(self, db: Session):
        self.db = db

    def _record(self, month_key: MonthKey) -> Optional[MonthSnapshotRecord]:
        return self.db.get(MonthSnapshotRecord, (month_key.year, month_key.month))

    def get(self, month_key: MonthKey) -> Optional[MonthSnapshot]:
        """Fetch and decode a month's snapshot"""
        record = self._record(month_key)
        if record is None:
            return None
        return snapshot_from_payload(record.payload)

    def set(self, month_key: MonthKey, snapshot: MonthSnapshot) -> None:
        """Insert or replace a month's snapshot"""
        payload = snapshot_to_payload(snapshot)
        record = self._record(month_key)
        if record is None:
            self.db.add(MonthSnapshotRecord(year=month_key.year, month=month_key.month, payload=payload))
        else:
            record.payload = payload
        self.db.flush()

    def keys(self) -> List[MonthKey]:
        rows = (
            self.db.query(MonthSnapshotRecord.year, MonthSnapshotRecord.month)
            .order_by(MonthSnapshotRecord.year, MonthSnapshotRecord.month)
            .all()
        )
        return [MonthKey(year, month) for year, month in rows]
