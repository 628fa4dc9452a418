"""Date and time parsing utilities.

All datetimes handled by lifeledger are naive local wall-clock times.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def local_now() -> datetime:
    """Current local wall-clock time."""
    return datetime.now()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return [local midnight, local midnight + 24h) for a day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative words "today", "yesterday", "this week", "last week",
    "this month" and "last month".

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "this week": today - timedelta(days=today.weekday()),
        "last week": today - timedelta(days=today.weekday() + 7),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_datetime(value: str, default: Optional[datetime] = None) -> datetime:
    """Parse a date/time string such as "2024-01-15 18:30" or "18:30".

    Missing parts are taken from ``default`` (now if not given). Timezone
    aware input is converted to naive local time.

    Raises:
        ValueError: If the string cannot be parsed
    """
    default = default or local_now()
    try:
        parsed = date_parser.parse(value.strip(), default=default.replace(second=0, microsecond=0))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse time '{value}': {e}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def get_date_range(period: str) -> tuple[date, date]:
    """Get first and last day (inclusive) of a named period.

    Args:
        period: One of today, this-week, last-week, this-month, last-month

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "today":
        return today, today
    if period == "this-week":
        return today - timedelta(days=today.weekday()), today
    if period == "last-week":
        start = today - timedelta(days=today.weekday() + 7)
        return start, start + timedelta(days=6)
    if period == "this-month":
        return today.replace(day=1), today
    if period == "last-month":
        start = (today - relativedelta(months=1)).replace(day=1)
        return start, today.replace(day=1) - timedelta(days=1)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: today, this-week, last-week, this-month, last-month"
    )
