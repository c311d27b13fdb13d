"""Date keys, manual date input and the date availability index.

The store is queried with an exact ``YYYY-MM-DD`` key built from the local
calendar date. The availability index is advisory: it only decorates the
date picker and never gates retrieval.
"""

import re
from datetime import date, datetime, timedelta
from typing import FrozenSet, Iterable, Optional, Union

DateLike = Union[date, datetime]

QUICK_DATES = {
    "Today": 0,
    "Yesterday": 1,
    "2 Days Ago": 2,
}

_DATE_INPUT_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*$")


def to_local_date(value: DateLike) -> date:
    """Reduce a date or datetime to a local calendar date.

    Aware datetimes are converted to the local timezone first; naive ones are
    taken to be local already. No UTC shift is applied.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    return value


def format_date_key(value: DateLike) -> str:
    """Format a date as the ``YYYY-MM-DD`` store key.

    Example:
        >>> format_date_key(date(2024, 3, 5))
        '2024-03-05'
    """
    day = to_local_date(value)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def format_display_date(value: DateLike) -> str:
    """Format a date the way the date picker shows it (DD/MM/YYYY)."""
    return "/".join(reversed(format_date_key(value).split("-")))


def parse_date_input(text: Optional[str]) -> Optional[date]:
    """Parse manually entered ``YYYY-MM-DD`` text.

    Returns None for anything that is not a real calendar date, so callers
    can ignore the input and keep their previous state.
    """
    if not text:
        return None

    match = _DATE_INPUT_PATTERN.match(text)
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def quick_date(days_ago: int, today: Optional[date] = None) -> date:
    """Return the date ``days_ago`` days before today (local calendar)."""
    base = today or date.today()
    return base - timedelta(days=days_ago)


def build_availability_index(crawled_dates: Iterable[Optional[str]]) -> FrozenSet[str]:
    """Collapse a crawled-date projection into a deduplicated set of keys."""
    return frozenset(value for value in crawled_dates if value)


def is_available(index: FrozenSet[str], value: DateLike) -> bool:
    """Check whether a date has at least one posting in the index."""
    return format_date_key(value) in index
