"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

_NUMBER_GROUPS = re.compile(r"\d+")


def normalize_date(date_str: Optional[str], today: Optional[date] = None) -> str:
    """Normalize a bank statement date to ``YYYY-MM-DD``.

    Accepts ``DD/MM/YYYY``, ``DD-MM-YYYY``, ``YYYY-MM-DD`` and ``YYYY/MM/DD``.
    The order is decided by whether the first number has four digits. Two
    digit years are taken to be in the 2000s.

    Missing or unreadable dates fall back to today's date rather than
    raising; a statement line with a mangled date is still worth keeping.

    Args:
        date_str: Date cell from the CSV
        today: Fallback date (defaults to ``date.today()``)

    Returns:
        Zero-padded ISO date string
    """
    fallback = (today or date.today()).isoformat()
    if not date_str:
        return fallback

    parts = _NUMBER_GROUPS.findall(str(date_str))
    if len(parts) < 3:
        return fallback

    if len(parts[0]) == 4:
        year, month, day = parts[:3]
    else:
        day, month, year = parts[:3]
        year = year.zfill(2)
        if len(year) == 2:
            year = f"20{year}"

    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "15/01/2024") and relative ones:
    "today", "yesterday", "last month", "this year", ...

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    # NZ statements put the day first
    try:
        dt = date_parser.parse(date_str, dayfirst=True)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
