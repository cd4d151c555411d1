"""Swedish public holiday calendar

Fixed-date holidays, Easter-relative holidays, midsummer eve and all saints' day,
merged with user-defined custom holidays. A custom holiday on the same date as a
computed one replaces its name.
"""

from datetime import date, timedelta
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

from household_budget.domain.models import Holiday, HolidaySource, PayPeriodWindow

FIXED_HOLIDAYS = [
    (1, 1, "Nyårsdagen"),
    (1, 6, "Trettondedag jul"),
    (5, 1, "Första maj"),
    (6, 6, "Sveriges nationaldag"),
    (12, 24, "Julafton"),
    (12, 25, "Juldagen"),
    (12, 26, "Annandag jul"),
    (12, 31, "Nyårsafton"),
]

# Offsets in days from Easter Sunday
EASTER_RELATIVE_HOLIDAYS = [
    (-2, "Långfredagen"),
    (1, "Annandag påsk"),
    (39, "Kristi himmelsfärdsdag"),
    (50, "Annandag pingst"),
]

FRIDAY = 4
SATURDAY = 5


def calculate_easter(year: int) -> date:
    """
    Easter Sunday for a Gregorian year (anonymous Gregorian algorithm).

    Example:
        2024 → 2024-03-31
        2025 → 2025-04-20
    """
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return date(year, month, day)


def midsummer_eve(year: int) -> date:
    """First Friday in June 19-25"""
    for day in range(19, 26):
        candidate = date(year, 6, day)
        if candidate.weekday() == FRIDAY:
            return candidate
    return date(year, 6, 24)


def all_saints_day(year: int) -> date:
    """First Saturday scanning October 31 down to October 25, then November 1-6"""
    for day in range(31, 24, -1):
        candidate = date(year, 10, day)
        if candidate.weekday() == SATURDAY:
            return candidate
    for day in range(1, 7):
        candidate = date(year, 11, day)
        if candidate.weekday() == SATURDAY:
            return candidate
    return date(year, 11, 1)


@lru_cache(maxsize=64)
def _computed_holidays(year: int) -> Tuple[Holiday, ...]:
    holidays = [
        Holiday(date(year, month, day), name, HolidaySource.FIXED)
        for month, day, name in FIXED_HOLIDAYS
    ]

    easter = calculate_easter(year)
    holidays.extend(
        Holiday(easter + timedelta(days=offset), name, HolidaySource.EASTER_RELATIVE)
        for offset, name in EASTER_RELATIVE_HOLIDAYS
    )

    holidays.append(Holiday(midsummer_eve(year), "Midsommarafton", HolidaySource.MOVING))
    holidays.append(Holiday(all_saints_day(year), "Alla helgons dag", HolidaySource.MOVING))
    return tuple(holidays)


def _merge(year: int, custom_holidays: Iterable[Holiday]) -> Dict[date, Holiday]:
    by_date: Dict[date, Holiday] = {}
    for holiday in _computed_holidays(year):
        by_date.setdefault(holiday.date, holiday)

    # Custom entries win on name
    for holiday in custom_holidays:
        if holiday.date.year == year:
            by_date[holiday.date] = Holiday(holiday.date, holiday.name, HolidaySource.CUSTOM)
    return by_date


def holidays_for_year(year: int, custom_holidays: Iterable[Holiday] = ()) -> List[Holiday]:
    """All holidays of a year, one per date, sorted by date"""
    by_date = _merge(year, custom_holidays)
    return [by_date[day] for day in sorted(by_date)]


def is_holiday(day: date, custom_holidays: Iterable[Holiday] = ()) -> bool:
    return name_of(day, custom_holidays) is not None


def name_of(day: date, custom_holidays: Iterable[Holiday] = ()) -> Optional[str]:
    """Holiday name for a date, or None if the date is not a holiday"""
    holiday = _merge(day.year, custom_holidays).get(day)
    return holiday.name if holiday else None


def holidays_in_window(window: PayPeriodWindow, custom_holidays: Iterable[Holiday] = ()) -> List[Holiday]:
    """Holidays falling inside an inclusive window, sorted by date"""
    custom = list(custom_holidays)
    return [
        holiday
        for year in range(window.start.year, window.end.year + 1)
        for holiday in holidays_for_year(year, custom)
        if holiday.date in window
    ]


def upcoming_holidays(today: date, count: int, custom_holidays: Iterable[Holiday] = ()) -> List[Holiday]:
    """
    Next `count` holidays on or after today.

    Scans the current and the following year only, so fewer than `count`
    results can be returned late in a year with a large count.
    """
    custom = list(custom_holidays)
    candidates = [
        holiday
        for year in (today.year, today.year + 1)
        for holiday in holidays_for_year(year, custom)
        if holiday.date >= today
    ]
    return candidates[:count]
