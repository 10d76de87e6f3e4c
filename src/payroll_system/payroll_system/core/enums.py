from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Derived status of an attendance record."""

    PRESENT = "Present"
    ABSENT = "Absent"


class LeaveStatus(str, Enum):
    """Approval state of a leave request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class AdjustmentType(str, Enum):
    ALLOWANCE = "Allowance"
    DEDUCTION = "Deduction"


class CalculationMode(str, Enum):
    FIXED = "Fixed"
    PERCENTAGE = "Percentage"


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"


class ImportStatus(str, Enum):
    """Lifecycle of a punch import job. COMPLETED and FAILED are terminal."""

    PENDING = "Pending"
    PROCESSING = "Processing"
    SAVING = "Saving"
    COMPLETED = "Completed"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ImportStatus.COMPLETED, ImportStatus.FAILED)
