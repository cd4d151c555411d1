"""Unit tests for account reconciliation across months"""

from household_budget.domain.models import (
    AccountBalanceRecord,
    EstimateSource,
    Financing,
    MonthKey,
    MonthSnapshot,
)
from household_budget.domain.reconciliation import (
    budget_deposit_balance,
    cost_leaves,
    estimate_current,
    estimated_final_balance,
    estimated_starting_balance,
    final_balance,
    project_balances,
    reconcile_month,
    reconcile_previous,
)
from conftest import cost, savings

M0 = MonthKey(2025, 9)
M1 = MonthKey(2025, 10)
M2 = MonthKey(2025, 11)


def month_with_ledger(actual_start=None):
    """Savings 200 kr and costs 150 kr on account A"""
    snapshot = MonthSnapshot(
        shared_savings=[savings("buffer", 20_000, account="A")],
        shared_costs=[cost("bills", 0, subs=[cost("power", 10_000, account="A"), cost("net", 5_000, account="A")])],
    )
    if actual_start is not None:
        snapshot.balances["A"] = AccountBalanceRecord(starting_balance=actual_start, starting_balance_is_actual=True)
    return snapshot


def test_final_balance_formula():
    categories = month_with_ledger().all_categories()

    assert final_balance("A", categories, 100_000) == 105_000
    assert final_balance("B", categories, 100_000) == 100_000


def test_final_balance_ignores_financing_tag():
    categories = [
        cost("group", 0, subs=[
            cost("rent", 10_000, account="A"),
            cost("sofa", 4_000, account="A", financing=Financing.ONE_OFF),
        ])
    ]

    assert final_balance("A", categories, 50_000) == 36_000


def test_budget_deposit_balance_backfills_recurring_costs():
    """Test start + savings + recurring - one-off"""
    categories = [
        savings("save", 2_000, account="A"),
        cost("group", 0, subs=[
            cost("rent", 10_000, account="A"),
            cost("sofa", 4_000, account="A", financing=Financing.ONE_OFF),
        ]),
    ]

    assert budget_deposit_balance("A", categories, 50_000) == 50_000 + 2_000 + 10_000 - 4_000
    assert final_balance("A", categories, 50_000) == 50_000 + 2_000 - 14_000


def test_cost_leaves_use_group_without_subcategories_and_inherit_account():
    categories = [
        cost("rent", 1_000, account="A"),
        cost("group", 999, account="B", subs=[cost("sub", 200)]),
        savings("save", 50, account="A"),
    ]

    leaves = list(cost_leaves(categories))

    assert [(leaf.id, leaf.account, leaf.amount) for leaf in leaves] == [("rent", "A", 1_000), ("sub", "B", 200)]


def test_estimate_uses_previous_recorded_final(store):
    previous = MonthSnapshot()
    previous.balances["A"] = AccountBalanceRecord(final_balance=77_000)
    store.set(M1, previous)

    estimate = estimated_starting_balance("A", M2, store)

    assert estimate.amount == 77_000
    assert estimate.source == EstimateSource.PREVIOUS_MONTH
    assert estimate.available


def test_reconciliation_chain(store):
    """Test month 1 final 1050 kr becomes month 2's estimated start"""
    store.set(M1, month_with_ledger(actual_start=100_000))
    store.set(M2, MonthSnapshot())

    finals = reconcile_previous(M2, store, ["A"])
    assert finals == {"A": 105_000}
    assert store.get(M1).balances["A"].final_balance == 105_000

    estimates = estimate_current(M2, store, ["A"])
    assert estimates["A"].amount == 105_000
    assert estimates["A"].source == EstimateSource.PREVIOUS_MONTH


def test_estimate_rebuilds_previous_month_from_its_actual_start(store):
    store.set(M1, month_with_ledger(actual_start=100_000))

    estimate = estimated_starting_balance("A", M2, store)

    assert estimate.amount == 105_000
    assert estimate.source == EstimateSource.RECONSTRUCTED


def test_two_step_fallback_reconstructs_previous_month(store):
    """Test month 0 final + month 1 categories without a start → month 2 estimate"""
    month0 = MonthSnapshot()
    month0.balances["A"] = AccountBalanceRecord(starting_balance=0, final_balance=200_000)
    store.set(M0, month0)
    store.set(M1, month_with_ledger())

    estimate = estimated_starting_balance("A", M2, store)

    assert estimate.amount == 205_000
    assert estimate.source == EstimateSource.RECONSTRUCTED


def test_two_step_fallback_without_previous_month(store):
    month0 = MonthSnapshot()
    month0.balances["A"] = AccountBalanceRecord(final_balance=200_000)
    store.set(M0, month0)

    assert estimated_starting_balance("A", M2, store).amount == 200_000


def test_estimate_unavailable_without_data(store):
    store.set(M1, month_with_ledger())

    estimate = estimated_starting_balance("A", M2, store)

    assert estimate.amount == 0
    assert estimate.source == EstimateSource.UNAVAILABLE
    assert not estimate.available


def test_reconcile_month_keeps_unknown_start_unrecorded(store):
    """Test no final balance is stored when the start is unknown"""
    store.set(M1, month_with_ledger())

    assert reconcile_month(M1, store, ["A"]) == {}
    assert store.get(M1).balances["A"].final_balance is None


def test_reconcile_month_does_not_touch_actual_start(store):
    store.set(M1, month_with_ledger(actual_start=100_000))

    reconcile_month(M1, store, ["A"])
    record = store.get(M1).balances["A"]

    assert record.starting_balance == 100_000
    assert record.starting_balance_is_actual is True
    assert record.final_balance == 105_000


def test_reconcile_missing_month_is_noop(store):
    assert reconcile_previous(M2, store, ["A"]) == {}
    assert store.keys() == []


def test_estimated_final_balance_uses_estimated_start(store):
    previous = MonthSnapshot()
    previous.balances["A"] = AccountBalanceRecord(final_balance=10_000)
    store.set(M1, previous)
    current = MonthSnapshot(
        shared_costs=[cost("g", 0, subs=[
            cost("rent", 3_000, account="A"),
            cost("trip", 1_000, account="A", financing=Financing.ONE_OFF),
        ])],
    )
    store.set(M2, current)

    assert estimated_final_balance("A", M2, store) == 10_000 + 3_000 - 1_000


def test_project_balances_carries_running_balance(store):
    store.set(M0, month_with_ledger(actual_start=100_000))
    store.set(M1, month_with_ledger())
    store.set(M2, month_with_ledger(actual_start=50_000))

    projection = project_balances(store, ["A"])

    assert projection[M0]["A"] == (100_000, 105_000)
    assert projection[M1]["A"] == (105_000, 110_000)
    assert projection[M2]["A"] == (50_000, 55_000)
