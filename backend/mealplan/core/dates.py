"""Date Keys - Pure helpers for the YYYY-MM-DD day keys.

Day keys are local-calendar dates, never UTC.
"""

import re
from datetime import date, timedelta


_DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def date_key(day: date) -> str:
    """Format a date (or datetime) as a day key."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_date_key(key: str) -> date:
    """Parse a strict YYYY-MM-DD day key.

    Args:
        key: The day key

    Returns:
        The calendar date

    Raises:
        ValueError: If the key is not a valid YYYY-MM-DD date
    """
    if not isinstance(key, str) or not _DATE_KEY_PATTERN.match(key):
        raise ValueError(f"Invalid date key {key!r}. Use YYYY-MM-DD.")
    return date.fromisoformat(key)


def normalize_date_key(day: "date | str") -> str:
    """Accept a date or a day key and return a validated day key."""
    if isinstance(day, date):
        return date_key(day)
    return date_key(parse_date_key(day))


def today_key() -> str:
    """Day key for today in the local calendar."""
    return date_key(date.today())


def previous_day_key(day: "date | str") -> str:
    """Day key for the calendar day before the given one."""
    key = normalize_date_key(day)
    return date_key(parse_date_key(key) - timedelta(days=1))


def week_keys(week_start: "date | str") -> list[str]:
    """The seven consecutive day keys starting at week_start."""
    start = parse_date_key(normalize_date_key(week_start))
    return [date_key(start + timedelta(days=offset)) for offset in range(7)]
