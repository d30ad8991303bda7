"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _period_start(anchor: str, period: str, today: date) -> date:
    """Return the first day of a this/last/next week, month or year."""
    if period == "week":
        start = today - timedelta(days=today.weekday())
        step = relativedelta(weeks=1)
    elif period == "month":
        start = today.replace(day=1)
        step = relativedelta(months=1)
    elif period == "year":
        start = today.replace(month=1, day=1)
        step = relativedelta(years=1)
    else:
        raise ValueError(f"Unknown period '{period}'")

    if anchor == "last":
        return start - step
    if anchor == "next":
        return start + step
    return start


def parse_date(value: Union[str, date, datetime]) -> date:
    """Parse a posting or transaction date.

    Supports:
    - ``date``/``datetime`` objects (returned as a date)
    - ISO dates as sent by ERPNext: "2024-01-15"
    - Other absolute formats: "1/15/24", "January 15, 2024"
    - Relative dates: "today", "yesterday", "last month", "this year",
      "last friday"

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip().lower()
    today = date.today()

    if text in ("today", "yesterday", "tomorrow"):
        offset = {"today": 0, "yesterday": -1, "tomorrow": 1}[text]
        return today + timedelta(days=offset)

    anchor, _, period = text.partition(" ")
    if anchor in ("last", "this", "next") and period:
        if anchor == "last" and period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)
        return _period_start(anchor, period, today)

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Invalid date format: {value}") from e


def get_date_range(period: str) -> tuple[date, date]:
    """Get (start, end) for this-month, this-year, this-week, last-month, last-year, last-week.

    "this" periods end today; "last" periods end on the day before the
    current period starts.

    Raises:
        ValueError: If the period is not recognized
    """
    anchor, _, unit = period.strip().lower().partition("-")
    if anchor not in ("this", "last") or unit not in ("week", "month", "year"):
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: this-month, this-year, "
            "this-week, last-month, last-year, last-week"
        )

    today = date.today()
    current_start = _period_start("this", unit, today)
    if anchor == "this":
        return current_start, today
    return _period_start("last", unit, today), current_start - timedelta(days=1)


def format_date(value: date) -> str:
    """Format a date the way the ledger expects it (YYYY-MM-DD)."""
    return value.isoformat()
