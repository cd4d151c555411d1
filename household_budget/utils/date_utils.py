"""Date manipulation utilities"""

from datetime import date, timedelta
from typing import List


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    """Shift a (year, month) pair by delta months, rolling over year boundaries"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def is_weekday(day: date) -> bool:
    """Monday-Friday"""
    return day.weekday() < 5


def is_friday(day: date) -> bool:
    return day.weekday() == 4
