from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.validators import require_max_length, require_period
from ..core.constants import LEAVE_REMARKS_MAX_LENGTH, VALID_LEAVE_TYPES
from ..core.enums import LeaveStatus
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .repository import LeaveRepository

_ALLOWED_TRANSITIONS = {
    LeaveStatus.PENDING: {LeaveStatus.APPROVED, LeaveStatus.REJECTED},
    LeaveStatus.APPROVED: {LeaveStatus.REJECTED},
    LeaveStatus.REJECTED: {LeaveStatus.APPROVED},
}


class LeaveService:
    """Use case: apply for leave and move it through approval.

    Owns the write-time rule that two non-rejected requests of one employee never overlap.
    """

    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    @staticmethod
    def _clean_remarks(remarks: Optional[str]) -> Optional[str]:
        cleaned = (remarks or "").strip() or None
        return require_max_length(cleaned, "Remarks", LEAVE_REMARKS_MAX_LENGTH)

    def apply(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        remarks: Optional[str] = None,
    ) -> int:
        leave_type = (leave_type or "").strip()
        if leave_type not in VALID_LEAVE_TYPES:
            raise ValidationError(f"Invalid leave type '{leave_type}'. Valid types: {', '.join(VALID_LEAVE_TYPES)}")
        require_period(start_date, end_date)
        remarks = self._clean_remarks(remarks)

        if not self._employees.get_by_id(employee_id):
            raise NotFoundError(f"Employee {employee_id} does not exist")

        if self._leaves.has_overlap(employee_id=employee_id, start=start_date, end=end_date):
            raise ConflictError("Employee already has an approved or pending leave for this date range")

        return self._leaves.create(
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            status=LeaveStatus.PENDING,
            remarks=remarks,
        )

    def change_status(self, *, leave_id: int, status: LeaveStatus, remarks: Optional[str] = None) -> None:
        leave = self._leaves.get_by_id(leave_id)
        if not leave:
            raise NotFoundError(f"Leave {leave_id} not found")

        if status not in _ALLOWED_TRANSITIONS.get(leave.status, set()):
            raise ValidationError(f"Cannot change status from '{leave.status.value}' to '{status.value}'")

        # A rejected request no longer holds its dates; re-approving must re-check them.
        if leave.status == LeaveStatus.REJECTED and self._leaves.has_overlap(
            employee_id=leave.employee_id,
            start=leave.start_date,
            end=leave.end_date,
            exclude_leave_id=leave.leave_id,
        ):
            raise ConflictError("Another leave already covers part of this date range")

        if not self._leaves.update_status(leave_id=leave_id, status=status, remarks=self._clean_remarks(remarks)):
            raise ValidationError("Updating leave status failed")

    def approve(self, *, leave_id: int, remarks: Optional[str] = None) -> None:
        self.change_status(leave_id=leave_id, status=LeaveStatus.APPROVED, remarks=remarks)

    def reject(self, *, leave_id: int, remarks: Optional[str] = None) -> None:
        self.change_status(leave_id=leave_id, status=LeaveStatus.REJECTED, remarks=remarks)
