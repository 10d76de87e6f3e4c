from __future__ import annotations

from datetime import date

from ..common.intervals import clipped_length
from .model import LeaveDays
from .repository import LeaveRepository


class LeaveAggregator:
    """Paid/unpaid approved leave days overlapping a pay period.

    Overlapping requests are prevented when leave is applied (see LeaveService),
    so days are not de-duplicated here: if that ever fails, days count twice.
    """

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def leave_days(self, *, employee_id: int, start: date, end: date) -> LeaveDays:
        paid = 0
        unpaid = 0
        for leave in self._leaves.list_approved_in_period(employee_id=employee_id, start=start, end=end):
            days = clipped_length(leave.start_date, leave.end_date, start, end)
            if leave.is_unpaid:
                unpaid += days
            else:
                paid += days
        return LeaveDays(paid_days=paid, unpaid_days=unpaid)
