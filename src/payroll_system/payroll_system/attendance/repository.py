from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def exists(self, employee_id: int, attendance_date: date) -> bool:
        raise NotImplementedError

    def list_present_dates(self, *, employee_id: int, start: date, end: date) -> Sequence[date]:
        """Dates in [start, end] with a Present record for the employee."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        attendance_date: date,
        shift_id: int,
        in_time: Optional[time],
        out_time: Optional[time],
        status: AttendanceStatus,
        working_hours: Decimal,
        late_entry: Optional[timedelta],
        early_leave: Optional[timedelta],
    ) -> int:
        """Insert a record. Raises ConflictError if (employee, date) already exists."""

        raise NotImplementedError
