from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list_approved_in_period(self, *, employee_id: int, start: date, end: date) -> Sequence[LeaveRequest]:
        """Approved requests of the employee whose range intersects [start, end]."""

        raise NotImplementedError

    def has_overlap(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        exclude_leave_id: Optional[int] = None,
    ) -> bool:
        """True when a non-rejected request of the employee intersects [start, end]."""

        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        status: LeaveStatus,
        remarks: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_status(self, *, leave_id: int, status: LeaveStatus, remarks: Optional[str] = None) -> bool:
        raise NotImplementedError
