"""Pay period windows and daily transfer budget"""

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Optional

from household_budget.domain.holidays import holidays_in_window, is_holiday
from household_budget.domain.models import DayClass, DayCounts, Holiday, MonthKey, PayPeriodWindow
from household_budget.utils.date_utils import add_months, generate_date_range, is_friday, is_weekday

DEFAULT_PAYDAY = 25


def pay_date(month_key: MonthKey, payday: int = DEFAULT_PAYDAY) -> date:
    """Pay date that closes the month's period"""
    if payday == 1:
        year, month = add_months(month_key.year, month_key.month, 1)
        return date(year, month, 1)
    return date(month_key.year, month_key.month, payday)


def pay_period_window(month_key: MonthKey, payday: int = DEFAULT_PAYDAY) -> PayPeriodWindow:
    """
    Canonical budget window of a month.

    payday 25: 25th of the previous month through the 24th of the month.
    payday 1: the calendar month.
    """
    if payday == 1:
        last_day = calendar.monthrange(month_key.year, month_key.month)[1]
        return PayPeriodWindow(
            start=date(month_key.year, month_key.month, 1),
            end=date(month_key.year, month_key.month, last_day),
        )

    previous = month_key.previous()
    return PayPeriodWindow(
        start=date(previous.year, previous.month, payday),
        end=date(month_key.year, month_key.month, payday - 1),
    )


def current_month_key(today: date, payday: int = DEFAULT_PAYDAY) -> MonthKey:
    """Month whose pay period contains today; rolls forward from payday on"""
    if payday > 1 and today.day >= payday:
        return MonthKey(*add_months(today.year, today.month, 1))
    return MonthKey.of(today)


def classify_day(day: date, custom_holidays: Iterable[Holiday] = ()) -> DayClass:
    return DayClass(
        is_weekday=is_weekday(day),
        is_friday=is_friday(day),
        is_holiday=is_holiday(day, custom_holidays),
    )


def classify_range(window: PayPeriodWindow, custom_holidays: Iterable[Holiday] = ()) -> DayCounts:
    """Count budget days (non-holiday weekdays) and budget Fridays in a window"""
    custom = list(custom_holidays)
    weekday_count = 0
    friday_count = 0

    for day in generate_date_range(window.start, window.end):
        day_class = classify_day(day, custom)
        if not day_class.counts_toward_budget:
            continue
        weekday_count += 1
        if day_class.is_friday:
            friday_count += 1

    return DayCounts(weekday_count=weekday_count, friday_count=friday_count)


def daily_budget(weekday_count: int, friday_count: int, daily_rate: int, friday_rate: int) -> int:
    """
    Daily transfer budget.

    Additive model: a Friday is a weekday and gets the daily rate, and also
    the weekend rate on top.
    """
    return weekday_count * daily_rate + friday_count * friday_rate


def remaining_window(
    month_key: MonthKey,
    today: date,
    payday: int = DEFAULT_PAYDAY,
) -> Optional[PayPeriodWindow]:
    """
    Part of the month's window still ahead of today.

    None for past months, the whole window for future months, and today
    through the window end for the month in progress.
    It ends on the day before payday so it never reaches past the total window.
    """
    window = pay_period_window(month_key, payday)
    if today > window.end:
        return None
    if today < window.start:
        return window
    return PayPeriodWindow(start=today, end=window.end)


def days_until_pay_date(month_key: MonthKey, today: date, payday: int = DEFAULT_PAYDAY) -> int:
    """Days from today to the pay date closing the month, 0 once it has passed"""
    return max((pay_date(month_key, payday) - today).days, 0)


def holiday_budget(
    window: PayPeriodWindow,
    daily_rate: int,
    friday_rate: int,
    custom_holidays: Iterable[Holiday] = (),
) -> int:
    """Transfers withheld because a weekday in the window is a holiday (reporting only)"""
    total = 0
    for holiday in holidays_in_window(window, custom_holidays):
        if not is_weekday(holiday.date):
            continue
        total += daily_rate
        if is_friday(holiday.date):
            total += friday_rate
    return total


@dataclass
class PeriodSummary:
    """Day counts and budgets for the total, remaining and holiday windows"""

    window: PayPeriodWindow
    total: DayCounts
    remaining: DayCounts
    total_daily_budget: int
    remaining_daily_budget: int
    holiday_budget: int
    days_until_pay_date: int
    holidays: List[Holiday] = field(default_factory=list)


def summarize_period(
    month_key: MonthKey,
    today: date,
    daily_rate: int,
    friday_rate: int,
    custom_holidays: Iterable[Holiday] = (),
    payday: int = DEFAULT_PAYDAY,
) -> PeriodSummary:
    custom = list(custom_holidays)
    window = pay_period_window(month_key, payday)
    total = classify_range(window, custom)

    ahead = remaining_window(month_key, today, payday)
    remaining = classify_range(ahead, custom) if ahead else DayCounts(weekday_count=0, friday_count=0)

    return PeriodSummary(
        window=window,
        total=total,
        remaining=remaining,
        total_daily_budget=daily_budget(total.weekday_count, total.friday_count, daily_rate, friday_rate),
        remaining_daily_budget=daily_budget(
            remaining.weekday_count, remaining.friday_count, daily_rate, friday_rate
        ),
        holiday_budget=holiday_budget(window, daily_rate, friday_rate, custom),
        days_until_pay_date=days_until_pay_date(month_key, today, payday),
        holidays=holidays_in_window(window, custom),
    )
