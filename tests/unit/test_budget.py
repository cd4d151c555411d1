"""Unit tests for the month budget calculation"""

from datetime import date
from household_budget.domain.budget import calculate_budget, category_total
from household_budget.domain.models import BudgetWarning, Earner, MonthKey
from conftest import cost, savings

DECEMBER = MonthKey(2025, 12)


def test_december_2025_end_to_end(household_month):
    """
    Test Nov 25 - Dec 24 2025 with Dec 24 as a holiday.

    21 weekdays * 300 + 4 Fridays * 540 = 8 460 kr daily budget
    90 000 - 8 460 - 25 000 = 56 540 kr split 50/50
    """
    result = calculate_budget(household_month, DECEMBER, today=date(2025, 12, 1))

    assert result.total_income == 9_000_000
    assert result.weekday_count == 21
    assert result.friday_count == 4
    assert result.total_daily_budget == 846_000
    assert result.total_expenses == 2_500_000
    assert result.earner_a_percent == 0.5
    assert result.earner_b_percent == 0.5
    assert result.earner_a_share == 2_827_000
    assert result.earner_b_share == 2_827_000
    assert abs(result.balance_left) < 1
    assert result.is_balanced
    assert result.warnings == []


def test_remaining_and_holiday_figures(household_month):
    result = calculate_budget(household_month, DECEMBER, today=date(2025, 12, 1))

    assert result.remaining_weekday_count == 17
    assert result.remaining_friday_count == 3
    assert result.remaining_daily_budget == 17 * 30_000 + 3 * 54_000
    assert result.holiday_budget == 30_000
    assert result.days_until_pay_date == 24
    assert [h.name for h in result.holidays_in_period] == ["Julafton"]


def test_past_month_has_no_remaining_budget(household_month):
    result = calculate_budget(household_month, DECEMBER, today=date(2026, 2, 1))

    assert result.remaining_daily_budget == 0
    assert result.days_until_pay_date == 0
    assert result.total_daily_budget == 846_000


def test_savings_use_own_amount_and_reduce_pool(household_month):
    household_month.shared_savings = [savings("buffer", 1_000_000)]

    result = calculate_budget(household_month, DECEMBER, today=date(2025, 12, 1))

    assert result.total_expenses == 3_500_000
    assert result.earner_a_share == (9_000_000 - 846_000 - 3_500_000) // 2


def test_personal_budgets_reported_but_not_shared(household_month):
    household_month.personal_costs_a = [cost("gym", 50_000)]
    household_month.personal_savings_b = [savings("fund", 100_000)]

    result = calculate_budget(household_month, DECEMBER, today=date(2025, 12, 1))

    assert result.earner_a_personal_costs == 50_000
    assert result.earner_b_personal_savings == 100_000
    assert result.total_expenses == 2_500_000


def test_zero_income_is_flagged_unbalanced(household_month):
    household_month.earner_a = Earner()
    household_month.earner_b = Earner()

    result = calculate_budget(household_month, DECEMBER, today=date(2025, 12, 1))

    assert result.earner_a_share == 0
    assert result.earner_b_share == 0
    assert result.balance_left == -846_000 - 2_500_000
    assert result.warnings == [BudgetWarning.UNBALANCED]
    assert not result.is_balanced


def test_cost_group_total_is_sum_of_subcategories():
    group = cost("food", 123_456, subs=[cost("groceries", 600_000), cost("clothes", 200_000)])

    assert group.total == 800_000
    assert category_total([group, cost("rent", 1_500_000), savings("s", 10)]) == 2_300_010
