"""
Reporting period presets.

Every report (past orders, expenditures, sales report, analytics) is
filtered by one of these presets. A preset resolves to an inclusive
``(start_date, end_date)`` pair; ``(None, None)`` means "no filter".

"Calendar" presets (week, month, year) cover the whole calendar unit,
the rolling ones (7days, 30days, quarter, ytd) end on the anchor day.
"""

from datetime import date, timedelta

from django.db import models
from django.utils import timezone

from .exceptions import InvalidPeriodError


class Period(models.TextChoices):
    TODAY = 'today', 'Today'
    WEEK = 'week', 'This Week'
    MONTH = 'month', 'This Month'
    YEAR = 'year', 'This Year'
    RANGE = 'range', 'Custom Range'
    LAST_7_DAYS = '7days', 'Last 7 Days'
    LAST_30_DAYS = '30days', 'Last 30 Days'
    QUARTER = 'quarter', 'This Quarter'
    YTD = 'ytd', 'Year-to-Date'


def start_of_week(day: date) -> date:
    """Weeks start on Sunday."""
    # date.weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_month(day: date) -> date:
    next_month = (day.replace(day=28) + timedelta(days=4)).replace(day=1)
    return next_month - timedelta(days=1)


def start_of_quarter(day: date) -> date:
    return date(day.year, ((day.month - 1) // 3) * 3 + 1, 1)


def resolve_period(period, start=None, end=None, anchor=None):
    """
    Turn a period preset into an inclusive date range.

    Args:
        period (str): One of :class:`Period` values.
        start (date, optional): Range start, used by ``range`` only.
        end (date, optional): Range end, used by ``range`` only.
        anchor (date, optional): Day treated as "today". Defaults to the
            current local date.

    Returns:
        tuple: ``(start_date, end_date)``; both None when unfiltered.

    Raises:
        InvalidPeriodError: Unknown period.
    """
    today = anchor or timezone.localdate()

    if period == Period.TODAY:
        return today, today
    if period == Period.WEEK:
        week_start = start_of_week(today)
        return week_start, week_start + timedelta(days=6)
    if period == Period.MONTH:
        return today.replace(day=1), end_of_month(today)
    if period == Period.YEAR:
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if period == Period.YTD:
        return date(today.year, 1, 1), today
    if period == Period.LAST_7_DAYS:
        return today - timedelta(days=6), today
    if period == Period.LAST_30_DAYS:
        return today - timedelta(days=29), today
    if period == Period.QUARTER:
        return start_of_quarter(today), today
    if period == Period.RANGE:
        if not start or not end:
            return None, None
        return start, end

    raise InvalidPeriodError(f"Unknown period: {period}")

