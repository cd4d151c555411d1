"""Month snapshot storage contract"""

import copy
from typing import Dict, List, Optional, Protocol

from household_budget.domain.models import MonthKey, MonthSnapshot


class BudgetPeriodStore(Protocol):
    """Keyed store of month snapshots. Writes per key are expected to be atomic."""

    def get(self, month_key: MonthKey) -> Optional[MonthSnapshot]:  # pragma: no cover - interface
        ...

    def set(self, month_key: MonthKey, snapshot: MonthSnapshot) -> None:  # pragma: no cover - interface
        ...

    def keys(self) -> List[MonthKey]:  # pragma: no cover - interface
        """Stored month keys, sorted ascending"""
        ...


class InMemoryBudgetPeriodStore:
    """Dict-backed store; snapshots are copied in and out like a real persistence layer"""

    def __init__(self, snapshots: Optional[Dict[MonthKey, MonthSnapshot]] = None):
        self._snapshots: Dict[MonthKey, MonthSnapshot] = {}
        for month_key, snapshot in (snapshots or {}).items():
            self.set(month_key, snapshot)

    def get(self, month_key: MonthKey) -> Optional[MonthSnapshot]:
        snapshot = self._snapshots.get(month_key)
        return copy.deepcopy(snapshot) if snapshot is not None else None

    def set(self, month_key: MonthKey, snapshot: MonthSnapshot) -> None:
        self._snapshots[month_key] = copy.deepcopy(snapshot)

    def keys(self) -> List[MonthKey]:
        return sorted(self._snapshots)
