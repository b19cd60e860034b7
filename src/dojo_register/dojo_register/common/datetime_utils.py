from __future__ import annotations

import calendar
from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def today_local() -> date:
    """Current calendar date in the server's local time zone.

    Note: Wrapped so tests can patch/mock easier.
    """
    return date.today()


def month_bounds(month: int, year: int) -> tuple[date, date]:
    """First and last day of the given month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)

