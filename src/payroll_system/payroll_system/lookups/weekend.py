from __future__ import annotations

from datetime import date

from ..common.datetime_utils import iter_dates, weekday_name
from ..core.constants import WEEKEND_LOOKUP_TYPE
from .repository import LookupRepository


class WeekendPolicy:
    """Resolved set of weekday names treated as non-working (case-insensitive)."""

    def __init__(self, day_names):
        self._days = frozenset(str(d).strip().lower() for d in day_names if d and str(d).strip())

    @property
    def day_names(self) -> frozenset[str]:
        return self._days

    def is_weekend(self, value: date) -> bool:
        return weekday_name(value).lower() in self._days

    def count_in(self, start: date, end: date) -> int:
        if not self._days:
            return 0
        return sum(1 for d in iter_dates(start, end) if self.is_weekend(d))

    def __bool__(self) -> bool:
        return bool(self._days)


class WeekendPolicyResolver:
    """Reads active "Weekend" lookup entries. Nothing configured means no weekends."""

    def __init__(self, lookups: LookupRepository):
        self._lookups = lookups

    def resolve(self) -> WeekendPolicy:
        entries = self._lookups.list_by_type(WEEKEND_LOOKUP_TYPE)
        return WeekendPolicy(e.lookup_value for e in entries if e.is_active)
