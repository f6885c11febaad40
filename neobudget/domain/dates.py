"""
Calendar utilities: day parsing and calendar-safe arithmetic.

All values are plain `date` objects (no time of day, no timezone).
"""
import calendar
import re
from datetime import date, datetime, timedelta


_DAY_RE = re.compile(r"(\d+)-(\d+)-(\d+)", re.ASCII)


def parse_day(value) -> date | None:
    """
    Parse a "YYYY-MM-DD"-shaped value into a date.

    Accepts date/datetime instances as well. Returns None on malformed,
    partially numeric or non-existent dates (any zero component fails).
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    m = _DAY_RE.fullmatch(value.strip())
    if not m:
        return None
    y, mo, d = (int(part) for part in m.groups())
    if not y or not mo or not d:
        return None
    try:
        return date(y, mo, d)
    except ValueError:
        return None


def format_day(d: date) -> str:
    return d.isoformat()


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_days(d: date, n: int) -> date:
    return d + timedelta(days=n)


def add_months(d: date, n: int) -> date:
    """Add n months, clamping the day to the end of the resulting month."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = min(d.day, last_day_of_month(year, month))
    return date(year, month, day)


def is_same_or_before(a: date, b: date) -> bool:
    return a <= b


def is_after(a: date, b: date) -> bool:
    return a > b


def days_between(a: date, b: date) -> int:
    return (b - a).days


def month_bounds(d: date) -> tuple[date, date]:
    """(first day, last day) of the month containing d."""
    first = d.replace(day=1)
    last = d.replace(day=last_day_of_month(d.year, d.month))
    return first, last
