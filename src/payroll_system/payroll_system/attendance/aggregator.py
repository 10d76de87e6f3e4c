from __future__ import annotations

from datetime import date

from .repository import AttendanceRepository


class AttendanceAggregator:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def count_present_days(self, *, employee_id: int, start: date, end: date) -> int:
        """Distinct calendar dates in [start, end] with a Present record.

        Counts dates, not rows, in case the one-record-per-day rule was ever broken.
        """
        dates = self._attendance.list_present_dates(employee_id=employee_id, start=start, end=end)
        return len({d for d in dates if start <= d <= end})
