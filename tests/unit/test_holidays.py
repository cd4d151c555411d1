"""Unit tests for the holiday calendar"""

import pytest
from datetime import date, timedelta
from household_budget.domain.holidays import (
    all_saints_day,
    calculate_easter,
    holidays_for_year,
    holidays_in_window,
    is_holiday,
    midsummer_eve,
    name_of,
    upcoming_holidays,
)
from household_budget.domain.models import Holiday, HolidaySource, PayPeriodWindow


@pytest.mark.parametrize(
    "year,expected",
    [
        (2019, date(2019, 4, 21)),
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
        (2026, date(2026, 4, 5)),
        (2038, date(2038, 4, 25)),
    ],
)
def test_calculate_easter_reference_years(year, expected):
    """Test Easter Sunday against published dates"""
    assert calculate_easter(year) == expected


def test_easter_relative_holidays_2025():
    """Test Good Friday, Easter Monday, Ascension and Whit Monday offsets"""
    names = {h.date: h.name for h in holidays_for_year(2025)}

    assert names[date(2025, 4, 18)] == "Långfredagen"
    assert names[date(2025, 4, 21)] == "Annandag påsk"
    assert names[date(2025, 5, 29)] == "Kristi himmelsfärdsdag"
    assert names[date(2025, 6, 9)] == "Annandag pingst"


def test_fixed_holidays_present_every_year():
    for year in range(2020, 2030):
        dates = {h.date for h in holidays_for_year(year)}
        for month, day in [(1, 1), (1, 6), (5, 1), (6, 6), (12, 24), (12, 25), (12, 26), (12, 31)]:
            assert date(year, month, day) in dates


def test_midsummer_eve_is_friday_in_range():
    for year in range(2020, 2035):
        eve = midsummer_eve(year)
        assert eve.weekday() == 4
        assert date(year, 6, 19) <= eve <= date(year, 6, 25)

    assert midsummer_eve(2025) == date(2025, 6, 20)


def test_all_saints_day_scans_end_of_october():
    """Test Saturday found scanning October 31 downwards"""
    assert all_saints_day(2026) == date(2026, 10, 31)  # Oct 31 is itself a Saturday
    assert all_saints_day(2025) == date(2025, 10, 25)

    for year in range(2020, 2035):
        assert all_saints_day(year).weekday() == 5


def test_is_holiday_agrees_with_year_listing():
    """Test is_holiday against holidays_for_year across a 10-year sample"""
    for year in range(2020, 2030):
        listed = {h.date for h in holidays_for_year(year)}
        day = date(year, 1, 1)
        while day.year == year:
            assert is_holiday(day) == (day in listed)
            day += timedelta(days=1)


def test_one_holiday_per_date_and_custom_name_wins():
    custom = [Holiday(date(2025, 12, 24), "Jul hemma"), Holiday(date(2025, 8, 15), "Semesterdag")]
    holidays = holidays_for_year(2025, custom)

    dates = [h.date for h in holidays]
    assert len(dates) == len(set(dates))
    assert dates == sorted(dates)
    assert name_of(date(2025, 12, 24), custom) == "Jul hemma"
    assert name_of(date(2025, 8, 15), custom) == "Semesterdag"
    assert next(h for h in holidays if h.date == date(2025, 12, 24)).source == HolidaySource.CUSTOM


def test_custom_holidays_only_apply_to_their_year():
    custom = [Holiday(date(2024, 8, 15), "Semesterdag")]

    assert is_holiday(date(2024, 8, 15), custom)
    assert not is_holiday(date(2025, 8, 15), custom)
    assert all(h.date.year == 2025 for h in holidays_for_year(2025, custom))


def test_name_of_regular_day_is_none():
    assert name_of(date(2025, 3, 12)) is None
    assert not is_holiday(date(2025, 3, 12))


def test_holidays_in_window_spans_year_boundary():
    window = PayPeriodWindow(date(2025, 12, 25), date(2026, 1, 24))
    dates = [h.date for h in holidays_in_window(window)]

    assert dates == [
        date(2025, 12, 25),
        date(2025, 12, 26),
        date(2025, 12, 31),
        date(2026, 1, 1),
        date(2026, 1, 6),
    ]


def test_upcoming_holidays_five_and_ten():
    today = date(2025, 12, 20)

    five = upcoming_holidays(today, 5)
    assert [h.date for h in five] == [
        date(2025, 12, 24),
        date(2025, 12, 25),
        date(2025, 12, 26),
        date(2025, 12, 31),
        date(2026, 1, 1),
    ]

    ten = upcoming_holidays(today, 10)
    assert [h.date for h in ten[5:]] == [
        date(2026, 1, 6),
        date(2026, 4, 3),
        date(2026, 4, 6),
        date(2026, 5, 1),
        date(2026, 5, 14),
    ]


def test_upcoming_holidays_includes_today():
    assert upcoming_holidays(date(2025, 12, 24), 1)[0].name == "Julafton"
