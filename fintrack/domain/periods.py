"""Budget period resolution - maps a recurrence rule onto a concrete date window"""

from datetime import date
from typing import Optional

from fintrack.domain.models import DateInterval
from fintrack.utils.date_utils import month_bounds, week_bounds

# Periods with no automatic window. Bi-weekly cycles have no anchor date and
# custom periods are free text, so both fall back to manual tracking.
MANUAL_PERIODS = frozenset({"bi-weekly", "custom"})


def resolve_period(period: str, reference_date: date) -> Optional[DateInterval]:
    """
    Resolve a budget period to the inclusive window containing reference_date.

    - monthly: first through last day of the reference month
    - weekly: Monday through Sunday of the reference ISO week
    - bi-weekly, custom: None (unresolved, never an error)

    None is the unresolved result; a resolved window always spans at least
    one day, so the two can't be confused.
    """
    if period == "monthly":
        start, end = month_bounds(reference_date)
        return DateInterval(start=start, end=end)
    if period == "weekly":
        start, end = week_bounds(reference_date)
        return DateInterval(start=start, end=end)
    return None


def is_manual_period(period: str) -> bool:
    return period in MANUAL_PERIODS
