"""Month budget calculation - core entry point producing CalculationResult"""

from datetime import date
from typing import Iterable

from household_budget.domain.allocation import allocate
from household_budget.domain.models import BudgetCategory, BudgetWarning, CalculationResult, MonthKey, MonthSnapshot
from household_budget.domain.pay_period import DEFAULT_PAYDAY, summarize_period

# 0.01 kr
DEFAULT_BALANCE_TOLERANCE = 1


def category_total(categories: Iterable[BudgetCategory]) -> int:
    """Sum of displayed totals (cost groups use their subcategory sum)"""
    return sum(category.total for category in categories)


def shared_expenses(snapshot: MonthSnapshot) -> int:
    return category_total(snapshot.shared_costs) + category_total(snapshot.shared_savings)


def calculate_budget(
    snapshot: MonthSnapshot,
    month_key: MonthKey,
    today: date,
    payday: int = DEFAULT_PAYDAY,
    tolerance: int = DEFAULT_BALANCE_TOLERANCE,
) -> CalculationResult:
    """
    Compute the month's figures.

    Flow:
    1. Day counts and daily budgets over the total/remaining/holiday windows
    2. Preliminary balance: income - daily budget - shared costs and savings
    3. Proportional split of the preliminary balance between the earners
    4. balance_left = preliminary - shares, flagged UNBALANCED beyond tolerance

    `today` is passed in, never read from the clock.
    """
    period = summarize_period(
        month_key,
        today,
        daily_rate=snapshot.daily_rate,
        friday_rate=snapshot.friday_rate,
        custom_holidays=snapshot.custom_holidays,
        payday=payday,
    )

    total_income = snapshot.earner_a.total_income + snapshot.earner_b.total_income
    total_expenses = shared_expenses(snapshot)
    preliminary_balance = total_income - period.total_daily_budget - total_expenses

    allocation = allocate(snapshot.earner_a, snapshot.earner_b, preliminary_balance)
    balance_left = preliminary_balance - allocation.share_a - allocation.share_b

    warnings = []
    if abs(balance_left) >= tolerance:
        warnings.append(BudgetWarning.UNBALANCED)

    return CalculationResult(
        total_income=total_income,
        total_daily_budget=period.total_daily_budget,
        remaining_daily_budget=period.remaining_daily_budget,
        holiday_budget=period.holiday_budget,
        balance_left=balance_left,
        earner_a_share=allocation.share_a,
        earner_b_share=allocation.share_b,
        earner_a_percent=allocation.percent_a,
        earner_b_percent=allocation.percent_b,
        days_until_pay_date=period.days_until_pay_date,
        weekday_count=period.total.weekday_count,
        friday_count=period.total.friday_count,
        total_expenses=total_expenses,
        remaining_weekday_count=period.remaining.weekday_count,
        remaining_friday_count=period.remaining.friday_count,
        earner_a_personal_costs=category_total(snapshot.personal_costs_a),
        earner_a_personal_savings=category_total(snapshot.personal_savings_a),
        earner_b_personal_costs=category_total(snapshot.personal_costs_b),
        earner_b_personal_savings=category_total(snapshot.personal_savings_b),
        holidays_in_period=period.holidays,
        warnings=warnings,
    )
