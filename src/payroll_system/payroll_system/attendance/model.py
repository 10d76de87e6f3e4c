from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time, timedelta
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per employee per date.

    out_time is None for an incomplete (single-punch) day.
    """

    attendance_id: int
    employee_id: int
    attendance_date: date
    in_time: Optional[time]
    out_time: Optional[time]
    status: AttendanceStatus
    shift_id: Optional[int] = None
    working_hours: Decimal = ZERO
    late_entry: Optional[timedelta] = None
    early_leave: Optional[timedelta] = None


@dataclass(frozen=True)
class NewAttendance:
    """Input to the attendance write path. shift_id=None means "use the employee's shift"."""

    employee_id: int
    attendance_date: date
    in_time: Optional[time]
    out_time: Optional[time]
    shift_id: Optional[int] = None


@dataclass(frozen=True)
class DerivedFields:
    status: AttendanceStatus
    working_hours: Decimal = ZERO
    late_entry: Optional[timedelta] = None
    early_leave: Optional[timedelta] = None
