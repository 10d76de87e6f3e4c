from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import UNPAID_LEAVE_TYPE
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: leave request over an inclusive [start_date, end_date] range."""

    leave_id: int
    employee_id: int
    leave_type: str
    start_date: date
    end_date: date
    status: LeaveStatus
    remarks: Optional[str] = None

    @property
    def is_unpaid(self) -> bool:
        return self.leave_type == UNPAID_LEAVE_TYPE


@dataclass(frozen=True)
class LeaveDays:
    paid_days: int = 0
    unpaid_days: int = 0
