"""
Calendar helpers
"""
import calendar
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo


def today_in(tz_name: str) -> date:
    """Current calendar date in the configured timezone"""
    return datetime.now(tz=ZoneInfo(tz_name)).date()


def month_bounds(day: date) -> tuple[date, date]:
    """First and last day of the month containing `day`"""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def one_month_before(day: date) -> date:
    """Same day in the previous month, clamped to that month's length (Mar 31 -> Feb 28)"""
    if day.month == 1:
        year, month = day.year - 1, 12
    else:
        year, month = day.year, day.month - 1
    last = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last))


def date_window(end: date, days: int) -> list[date]:
    """`days` consecutive dates ending with `end`, ascending"""
    start = end - timedelta(days=days - 1)
    return [start + timedelta(days=i) for i in range(days)]
