"""Age calculator — elapsed years, months and days between two calendar dates.

Pure Python, plain date-component subtraction. No time-of-day or timezone
arithmetic: both dates are calendar dates. Borrowing:
  - negative days   → take one month, add the length of the month before
                      the reference month (leap-aware February)
  - negative months → take one year, add 12
"""

from __future__ import annotations

import calendar
from datetime import date, datetime
from zoneinfo import ZoneInfo

from nic_engine.config import settings
from nic_engine.schemas.nic import AgeBreakdown


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, Gregorian leap rule for February."""
    return calendar.monthrange(year, month)[1]


def _previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def today() -> date:
    """Current calendar date in the configured timezone."""
    return datetime.now(ZoneInfo(settings.timezone)).date()


def age_at(birth_date: date, reference_date: date) -> AgeBreakdown:
    """Calculate the age of someone born on birth_date as of reference_date.

    Args:
        birth_date: Date of birth.
        reference_date: The "now" to measure against.

    Returns:
        AgeBreakdown with 0 <= months <= 11 and days >= 0. A reference date
        before the birth date yields a zero age.
    """
    if reference_date < birth_date:
        return AgeBreakdown(years=0, months=0, days=0)

    years = reference_date.year - birth_date.year
    months = reference_date.month - birth_date.month
    days = reference_date.day - birth_date.day

    # A short preceding month (Feb after a 31st) can leave days negative
    # after one borrow, so keep walking back one month at a time.
    borrow_year, borrow_month = reference_date.year, reference_date.month
    while days < 0:
        months -= 1
        borrow_year, borrow_month = _previous_month(borrow_year, borrow_month)
        days += days_in_month(borrow_year, borrow_month)

    if months < 0:
        years -= 1
        months += 12

    return AgeBreakdown(years=years, months=months, days=days)
