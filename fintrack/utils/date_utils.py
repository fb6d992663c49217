"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import Tuple


def month_bounds(reference: date) -> Tuple[date, date]:
    """First and last calendar day of the month containing reference"""
    last_day = calendar.monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def week_bounds(reference: date) -> Tuple[date, date]:
    """Monday through Sunday of the ISO week containing reference"""
    start = reference - timedelta(days=reference.isoweekday() - 1)
    return start, start + timedelta(days=6)


def month_of(year: int, month: int) -> Tuple[date, date]:
    """Bounds for an explicit year/month pair"""
    return month_bounds(date(year, month, 1))
