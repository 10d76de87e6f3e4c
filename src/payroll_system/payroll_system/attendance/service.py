from __future__ import annotations

import logging

from ..core.constants import BLOCKED_EMPLOYEE_STATUSES
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from ..shifts.repository import ShiftRepository
from .derivation import derive_fields
from .model import NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Attendance write path shared by manual entry and the punch importer."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        leaves: LeaveRepository,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts
        self._leaves = leaves

    def record_attendance(self, new: NewAttendance) -> int:
        employee = self._employees.get_by_id(new.employee_id)
        if not employee:
            raise NotFoundError(f"Employee {new.employee_id} not found")

        errors: list[str] = []
        day = new.attendance_date

        if employee.joining_date and day < employee.joining_date:
            errors.append(
                f"Attendance date cannot be before employee's joining date ({employee.joining_date:%Y-%m-%d})."
            )

        if (employee.status or "").strip().lower() in BLOCKED_EMPLOYEE_STATUSES:
            errors.append("Cannot submit attendance for an employee who is resigned or on leave.")

        if self._leaves.list_approved_in_period(employee_id=employee.employee_id, start=day, end=day):
            errors.append(f"Cannot submit attendance for {day:%Y-%m-%d}. Employee is on approved leave for this date.")

        shift_id = new.shift_id or employee.shift_id
        shift = None
        if not shift_id:
            errors.append("Employee has no assigned shift. Please assign a shift to the employee first.")
        else:
            shift = self._shifts.get_by_id(shift_id)
            if not shift:
                errors.append("Invalid shift selected.")
            elif not shift.is_active:
                errors.append("Selected shift is not active.")

        if errors:
            raise ValidationError("\n".join(errors))

        if self._attendance.exists(employee.employee_id, day):
            raise ConflictError(f"Attendance record already exists for this employee on {day:%Y-%m-%d}.")

        derived = derive_fields(new.in_time, new.out_time, shift)
        attendance_id = self._attendance.create(
            employee_id=employee.employee_id,
            attendance_date=day,
            shift_id=int(shift_id),
            in_time=new.in_time,
            out_time=new.out_time,
            status=derived.status,
            working_hours=derived.working_hours,
            late_entry=derived.late_entry,
            early_leave=derived.early_leave,
        )
        logger.debug("[attendance] recorded employee_id=%s date=%s status=%s", employee.employee_id, day, derived.status.value)
        return attendance_id
