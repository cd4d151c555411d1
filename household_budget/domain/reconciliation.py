"""Account balance reconciliation across months

Two closing-balance formulas are kept apart on purpose:

- final_balance: what is actually left on the account. Every cost leaf tagged
  to the account is withdrawn, savings are deposited.
- estimated_final_balance: budget-deposit view used for forward projections.
  Recurring costs are deposited by the cost budget, one-off costs are withdrawn.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from household_budget.domain.models import (
    BalanceEstimate,
    BudgetCategory,
    CategoryType,
    EstimateSource,
    Financing,
    MonthKey,
    MonthSnapshot,
)
from household_budget.domain.store import BudgetPeriodStore


def cost_leaves(categories: Iterable[BudgetCategory]) -> Iterator[BudgetCategory]:
    """
    Leaf cost entries of all cost groups.

    A group with subcategories contributes its subcategories, a group without
    them is its own leaf. Subcategories without an account inherit the group's.
    """
    for group in categories:
        if group.type != CategoryType.COST:
            continue
        if not group.sub_categories:
            yield group
            continue
        for sub in group.sub_categories:
            if sub.account is None and group.account is not None:
                yield BudgetCategory(
                    id=sub.id,
                    name=sub.name,
                    amount=sub.amount,
                    type=CategoryType.COST,
                    account=group.account,
                    financing=sub.financing,
                )
            else:
                yield sub


def savings_for_account(account: str, categories: Iterable[BudgetCategory]) -> int:
    return sum(
        category.amount
        for category in categories
        if category.type == CategoryType.SAVINGS and category.account == account
    )


def costs_for_account(
    account: str,
    categories: Iterable[BudgetCategory],
    financing: Optional[Financing] = None,
) -> int:
    """Sum of cost leaves on the account, optionally restricted to one financing kind"""
    return sum(
        leaf.amount
        for leaf in cost_leaves(categories)
        if leaf.account == account and (financing is None or leaf.financing == financing)
    )


def final_balance(account: str, categories: Iterable[BudgetCategory], starting_balance: int) -> int:
    """Closing balance: start + savings deposits - all cost withdrawals"""
    categories = list(categories)
    return (
        starting_balance
        + savings_for_account(account, categories)
        - costs_for_account(account, categories)
    )


def budget_deposit_balance(account: str, categories: Iterable[BudgetCategory], starting_balance: int) -> int:
    """Closing balance when recurring costs are backfilled: start + savings + recurring - one-off"""
    categories = list(categories)
    return (
        starting_balance
        + savings_for_account(account, categories)
        + costs_for_account(account, categories, Financing.RECURRING)
        - costs_for_account(account, categories, Financing.ONE_OFF)
    )


def _recorded_final(snapshot: Optional[MonthSnapshot], account: str) -> Optional[int]:
    if snapshot is None or account not in snapshot.balances:
        return None
    return snapshot.balances[account].final_balance


def estimated_starting_balance(account: str, month_key: MonthKey, store: BudgetPeriodStore) -> BalanceEstimate:
    """
    Opening balance estimate for a month without an actual figure.

    1. The previous month's recorded final balance.
    2. Otherwise the previous month's final balance rebuilt from its own
       categories, starting from its actual starting balance or, failing that,
       from the final balance recorded two months back.
    3. Otherwise unavailable (amount 0).
    """
    previous_key = month_key.previous()
    previous = store.get(previous_key)

    recorded = _recorded_final(previous, account)
    if recorded is not None:
        return BalanceEstimate(recorded, EstimateSource.PREVIOUS_MONTH)

    if previous is not None:
        record = previous.balances.get(account)
        if record is not None and record.starting_balance_is_actual:
            return BalanceEstimate(
                final_balance(account, previous.all_categories(), record.starting_balance),
                EstimateSource.RECONSTRUCTED,
            )

    stand_in = _recorded_final(store.get(previous_key.previous()), account)
    if stand_in is not None:
        categories = previous.all_categories() if previous is not None else []
        return BalanceEstimate(final_balance(account, categories, stand_in), EstimateSource.RECONSTRUCTED)

    return BalanceEstimate(0, EstimateSource.UNAVAILABLE)


def starting_balance(
    account: str,
    month_key: MonthKey,
    snapshot: MonthSnapshot,
    store: BudgetPeriodStore,
) -> int:
    """Actual starting balance when recorded, otherwise the estimate"""
    record = snapshot.balances.get(account)
    if record is not None and record.starting_balance_is_actual:
        return record.starting_balance
    return estimated_starting_balance(account, month_key, store).amount


def estimated_final_balance(account: str, month_key: MonthKey, store: BudgetPeriodStore) -> int:
    """Forward-looking closing balance of a stored month (budget-deposit formula)"""
    snapshot = store.get(month_key) or MonthSnapshot()
    start = starting_balance(account, month_key, snapshot, store)
    return budget_deposit_balance(account, snapshot.all_categories(), start)


def reconcile_month(month_key: MonthKey, store: BudgetPeriodStore, accounts: Iterable[str]) -> Dict[str, int]:
    """
    Recompute and persist the final balance of every account for a month.

    Only `final_balance` is written; user-entered starting balances are left
    untouched. An account with neither an actual starting balance nor an
    available estimate gets no final balance, so an unknown start is never
    passed on as a recorded zero. Returns the final balances written.
    """
    snapshot = store.get(month_key)
    if snapshot is None:
        return {}

    categories = snapshot.all_categories()
    finals: Dict[str, int] = {}
    for account in accounts:
        record = snapshot.balance_for(account)
        if record.starting_balance_is_actual:
            start = record.starting_balance
        else:
            estimate = estimated_starting_balance(account, month_key, store)
            if not estimate.available:
                record.final_balance = None
                continue
            start = estimate.amount

        finals[account] = final_balance(account, categories, start)
        record.final_balance = finals[account]

    store.set(month_key, snapshot)
    return finals


def reconcile_previous(month_key: MonthKey, store: BudgetPeriodStore, accounts: Iterable[str]) -> Dict[str, int]:
    """First phase of a month switch: bring the previous month's final balances up to date"""
    return reconcile_month(month_key.previous(), store, accounts)


def estimate_current(month_key: MonthKey, store: BudgetPeriodStore, accounts: Iterable[str]) -> Dict[str, BalanceEstimate]:
    """Second phase of a month switch: opening estimates for the month, read after reconcile_previous"""
    return {account: estimated_starting_balance(account, month_key, store) for account in accounts}


def project_balances(store: BudgetPeriodStore, accounts: List[str]) -> Dict[MonthKey, Dict[str, Tuple[int, int]]]:
    """
    Running (starting, final) balance per account over all stored months.

    Each month starts from the previous month's final balance unless it has an
    actual starting balance. Gaps between stored months carry the balance over.
    Nothing is persisted.
    """
    running = {account: 0 for account in accounts}
    projection: Dict[MonthKey, Dict[str, Tuple[int, int]]] = {}

    for month_key in store.keys():
        snapshot = store.get(month_key)
        if snapshot is None:
            continue
        categories = snapshot.all_categories()
        month_balances: Dict[str, Tuple[int, int]] = {}

        for account in accounts:
            record = snapshot.balances.get(account)
            start = record.starting_balance if record and record.starting_balance_is_actual else running[account]
            final = final_balance(account, categories, start)
            month_balances[account] = (start, final)
            running[account] = final

        projection[month_key] = month_balances

    return projection
