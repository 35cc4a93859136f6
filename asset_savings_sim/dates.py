"""Calendar helpers (timezone-free, built on datetime.date)."""

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

DAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")


def days_in_month(year: int, month: int) -> int:
    """Number of days in the given month (leap years included)."""
    return calendar.monthrange(year, month)[1]


def day_of_week(day: date) -> int:
    """Day of week with 0=Sunday ... 6=Saturday."""
    # date.weekday() is 0=Monday
    return (day.weekday() + 1) % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    current = start
    one_day = timedelta(days=1)
    while current <= end:
        yield current
        current += one_day


def day_count(start: date, end: date) -> int:
    """Inclusive number of days between start and end (0 if end < start)."""
    return max(0, (end - start).days + 1)


def parse_iso_date(s: str) -> date:
    """Parse "YYYY-MM-DD". Raises ValueError on malformed input."""
    return date.fromisoformat(s.strip())


def parse_price_date(s: str) -> date:
    """Parse a price-table date "MM/DD/YYYY" (zero padding optional)."""
    return datetime.strptime(s.strip(), "%m/%d/%Y").date()


def parse_day_of_week(s: str | int) -> int:
    """Parse 0-6 or a three-letter day name (sun..sat) → 0=Sunday index."""
    if isinstance(s, int):
        return s
    txt = s.strip().lower()
    if txt[:3] in DAY_NAMES and not txt.isdigit():
        return DAY_NAMES.index(txt[:3])
    return int(txt)
