"""Month-switch orchestration over a BudgetPeriodStore"""

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from household_budget.domain.budget import DEFAULT_BALANCE_TOLERANCE, calculate_budget
from household_budget.domain.exceptions import MonthNotFoundError, UnknownAccountError
from household_budget.domain.models import (
    AccountReport,
    BalanceEstimate,
    CalculationResult,
    MonthKey,
    MonthSnapshot,
)
from household_budget.domain.months import create_month
from household_budget.domain.pay_period import DEFAULT_PAYDAY
from household_budget.domain.reconciliation import (
    budget_deposit_balance,
    estimate_current,
    final_balance,
    project_balances,
    reconcile_previous,
)
from household_budget.domain.store import BudgetPeriodStore
from household_budget.infrastructure.observability.logging import log_month_loaded
from household_budget.infrastructure.observability.metrics import (
    month_load_histogram,
    reconciliation_write_counter,
    record_month_load,
)


@dataclass
class MonthView:
    """Everything the caller displays for one month"""

    month_key: MonthKey
    snapshot: MonthSnapshot
    result: CalculationResult
    accounts: List[AccountReport] = field(default_factory=list)


class MonthService:
    """
    Controller for month switches and edits.

    A month switch runs two phases in order:
    1. reconcile_previous: recompute and persist the previous month's final balances
    2. estimate_current: derive this month's opening estimates from them
    The month's own figures are then calculated and persisted.
    """

    def __init__(
        self,
        store: BudgetPeriodStore,
        accounts: List[str],
        payday: int = DEFAULT_PAYDAY,
        tolerance: int = DEFAULT_BALANCE_TOLERANCE,
        default_daily_rate: int = 0,
        default_friday_rate: int = 0,
    ):
        self.store = store
        self.accounts = list(accounts)
        self.payday = payday
        self.tolerance = tolerance
        self.default_daily_rate = default_daily_rate
        self.default_friday_rate = default_friday_rate

    def months(self) -> List[MonthKey]:
        return self.store.keys()

    def ensure_month(self, month_key: MonthKey, template: Optional[MonthSnapshot] = None) -> MonthSnapshot:
        """Stored snapshot for the month, created on first access"""
        snapshot = self.store.get(month_key)
        if snapshot is not None:
            return snapshot

        logging.info("Creating month", extra={"month": str(month_key), "step": "create_month"})
        return create_month(
            month_key,
            self.store,
            template=template,
            default_daily_rate=self.default_daily_rate,
            default_friday_rate=self.default_friday_rate,
        )

    def load_month(self, month_key: MonthKey, today: date) -> MonthView:
        """Switch to a month: reconcile the previous month, estimate, calculate and persist"""
        start_time = time.time()

        with month_load_histogram.time():
            self.ensure_month(month_key)

            finals = reconcile_previous(month_key, self.store, self.accounts)
            if finals:
                reconciliation_write_counter.inc()
                logging.info(
                    "Previous month reconciled",
                    extra={"month": str(month_key.previous()), "step": "reconcile_previous", "final_balances": finals},
                )

            estimates = estimate_current(month_key, self.store, self.accounts)
            view = self._recalculate(month_key, today, estimates)

        unavailable = sum(
            1
            for report in view.accounts
            if not report.starting_balance_is_actual and not report.estimated_starting_balance.available
        )
        record_month_load(view.result.is_balanced, unavailable)
        log_month_loaded(
            month_key,
            view.result.balance_left,
            view.result.is_balanced,
            unavailable,
            (time.time() - start_time) * 1000,
        )
        return view

    def update_month(self, month_key: MonthKey, snapshot: MonthSnapshot, today: date) -> MonthView:
        """Replace the month's editable state (balances are kept) and recompute"""
        existing = self.ensure_month(month_key)
        snapshot.balances = existing.balances
        snapshot.last_result = existing.last_result
        self.store.set(month_key, snapshot)
        return self._recalculate(month_key, today)

    def set_starting_balance(self, month_key: MonthKey, account: str, amount: int, today: date) -> MonthView:
        """Record an actual starting balance and recompute"""
        self._check_account(account)
        snapshot = self.ensure_month(month_key)
        record = snapshot.balance_for(account)
        record.starting_balance = amount
        record.starting_balance_is_actual = True
        self.store.set(month_key, snapshot)
        return self._recalculate(month_key, today)

    def clear_starting_balance(self, month_key: MonthKey, account: str, today: date) -> MonthView:
        """Drop an actual starting balance so the month falls back to the estimate"""
        self._check_account(account)
        snapshot = self.store.get(month_key)
        if snapshot is None:
            raise MonthNotFoundError(f"No data stored for {month_key}")
        record = snapshot.balance_for(account)
        record.starting_balance = 0
        record.starting_balance_is_actual = False
        self.store.set(month_key, snapshot)
        return self._recalculate(month_key, today)

    def prognosis(self) -> Dict[MonthKey, Dict[str, Tuple[int, int]]]:
        return project_balances(self.store, self.accounts)

    def _check_account(self, account: str) -> None:
        if account not in self.accounts:
            raise UnknownAccountError(f"Unknown account: {account}")

    def _recalculate(
        self,
        month_key: MonthKey,
        today: date,
        estimates: Optional[Dict[str, BalanceEstimate]] = None,
    ) -> MonthView:
        """Recompute result and final balances of a stored month and persist them"""
        snapshot = self.store.get(month_key)
        if snapshot is None:
            raise MonthNotFoundError(f"No data stored for {month_key}")
        if estimates is None:
            estimates = estimate_current(month_key, self.store, self.accounts)

        result = calculate_budget(snapshot, month_key, today, payday=self.payday, tolerance=self.tolerance)
        if not result.is_balanced:
            logging.warning(
                "Budget not balanced",
                extra={"month": str(month_key), "balance_left_ore": result.balance_left},
            )

        categories = snapshot.all_categories()
        reports = []
        for account in self.accounts:
            record = snapshot.balance_for(account)
            estimate = estimates[account]
            start = record.starting_balance if record.starting_balance_is_actual else estimate.amount

            # Closing figures exist only when the start is known, see reconcile_month
            known_start = record.starting_balance_is_actual or estimate.available
            closing = final_balance(account, categories, start) if known_start else None
            projected = budget_deposit_balance(account, categories, start) if known_start else None
            record.final_balance = closing
            reports.append(
                AccountReport(
                    account=account,
                    starting_balance=start,
                    starting_balance_is_actual=record.starting_balance_is_actual,
                    estimated_starting_balance=estimate,
                    final_balance=closing,
                    estimated_final_balance=projected,
                )
            )

        snapshot.last_result = result
        self.store.set(month_key, snapshot)
        return MonthView(month_key=month_key, snapshot=snapshot, result=result, accounts=reports)
