"""Proportional split of the shared pool between two earners"""

from household_budget.domain.models import Allocation, Earner


def _round_div(numerator: int, denominator: int) -> int:
    """numerator / denominator rounded half up, denominator > 0"""
    return (2 * numerator + denominator) // (2 * denominator)


def allocate(earner_a: Earner, earner_b: Earner, pool: int) -> Allocation:
    """
    Split `pool` in proportion to each earner's total income.

    `pool` is the preliminary balance computed by the caller:
    total income - daily budget - shared expenses.

    Shares are rounded to whole öre and earner B absorbs the rounding
    remainder (at most 1 öre), so residual = pool - share_a - share_b is 0
    for any consistent input. It is still returned so callers can check it.

    Example:
        incomes 45 000 / 45 000 kr, pool 3 öre → share_a 2, share_b 1
    """
    income_a = earner_a.total_income
    income_b = earner_b.total_income
    total = income_a + income_b

    if total == 0:
        return Allocation(share_a=0, share_b=0, percent_a=0.0, percent_b=0.0, residual=pool)

    share_a = _round_div(pool * income_a, total)
    share_b = _round_div(pool * income_b, total)

    # B absorbs rounding remainder to keep the split exact
    share_b += pool - share_a - share_b

    return Allocation(
        share_a=share_a,
        share_b=share_b,
        percent_a=income_a / total,
        percent_b=income_b / total,
        residual=pool - share_a - share_b,
    )
