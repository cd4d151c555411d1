"""Month creation rules"""

import copy
from typing import Optional

from household_budget.domain.models import MonthKey, MonthSnapshot
from household_budget.domain.store import BudgetPeriodStore


def nearest_month(month_key: MonthKey, store: BudgetPeriodStore) -> Optional[MonthKey]:
    """Closest stored month; earlier months win ties"""
    candidates = [key for key in store.keys() if key != month_key]
    if not candidates:
        return None
    return min(candidates, key=lambda key: (key.months_between(month_key), key > month_key))


def copy_budget(source: MonthSnapshot) -> MonthSnapshot:
    """Copy incomes, categories, rates and custom holidays; balances and results are not carried"""
    snapshot = copy.deepcopy(source)
    snapshot.balances = {}
    snapshot.last_result = None
    return snapshot


def create_month(
    month_key: MonthKey,
    store: BudgetPeriodStore,
    template: Optional[MonthSnapshot] = None,
    default_daily_rate: int = 0,
    default_friday_rate: int = 0,
) -> MonthSnapshot:
    """
    Build and store the snapshot for a month seen for the first time.

    Source, in order: the template, the nearest stored month, an empty month
    with the default transfer rates.
    """
    if template is not None:
        snapshot = copy_budget(template)
    else:
        source_key = nearest_month(month_key, store)
        source = store.get(source_key) if source_key is not None else None
        if source is not None:
            snapshot = copy_budget(source)
        else:
            snapshot = MonthSnapshot(daily_rate=default_daily_rate, friday_rate=default_friday_rate)

    store.set(month_key, snapshot)
    return snapshot
