"""Date parsing utilities for query parameters and API records."""

import re
from datetime import date, datetime, timedelta

# Strict formats accepted from callers. The budgeting API only understands
# ISO dates, so no locale-dependent formats are tried here.
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
MONTH_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def parse_iso_date(raw_date: str) -> date:
    """Parse a YYYY-MM-DD string into a date object.

    Args:
        raw_date: The raw date string to parse.

    Returns:
        Parsed date object.

    Raises:
        ValueError: If the string is not a valid ISO calendar date.
    """
    if not raw_date:
        raise ValueError("Empty date string")

    date_str = raw_date.strip()
    if not ISO_DATE_PATTERN.match(date_str):
        raise ValueError(f"Date must be in YYYY-MM-DD format: '{raw_date}'")

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Cannot parse date: '{raw_date}'") from e


def parse_month(raw_month: str) -> date:
    """Parse a YYYY-MM string into the first day of that month.

    Args:
        raw_month: The raw month string to parse.

    Returns:
        Date for the first day of the month.

    Raises:
        ValueError: If the string is not a valid YYYY-MM month.
    """
    if not raw_month:
        raise ValueError("Empty month string")

    month_str = raw_month.strip()
    if not MONTH_PATTERN.match(month_str):
        raise ValueError(f"Month must be in YYYY-MM format: '{raw_month}'")

    try:
        return datetime.strptime(f"{month_str}-01", "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Cannot parse month: '{raw_month}'") from e


def coerce_date(value: object) -> date:
    """Convert an API date value (date, datetime or ISO string) to a date.

    Args:
        value: Date value as returned by the budgeting API.

    Returns:
        Date object.

    Raises:
        ValueError: If the value cannot be interpreted as a date.
    """
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise ValueError(f"Cannot interpret {value!r} as a date")


def days_before(today: date, days: int) -> date:
    """Return the date a number of days before a reference date.

    Args:
        today: Reference date.
        days: Number of days to go back.

    Returns:
        The earlier date.
    """
    return today - timedelta(days=days)


def date_to_iso(d: date | None) -> str | None:
    """Convert a date to ISO 8601 format (YYYY-MM-DD).

    Args:
        d: Date to convert, or None.

    Returns:
        ISO format date string, or None.
    """
    if d is None:
        return None
    return d.isoformat()
