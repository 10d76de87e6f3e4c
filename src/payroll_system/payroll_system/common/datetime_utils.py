from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterator

# Fixed English names, independent of the process locale.
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_utc() -> datetime:
    """Current UTC time (naive).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def weekday_name(value: date) -> str:
    return WEEKDAY_NAMES[value.weekday()]


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date in [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)
