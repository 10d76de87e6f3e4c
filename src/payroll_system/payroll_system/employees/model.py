from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.constants import ACTIVE_EMPLOYEE_STATUS


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee (snapshot read at computation time)."""

    employee_id: int
    employee_code: str
    full_name: str
    basic_salary: Decimal
    status: str = ACTIVE_EMPLOYEE_STATUS
    machine_code: Optional[int] = None
    shift_id: Optional[int] = None
    joining_date: Optional[date] = None

    @property
    def is_active(self) -> bool:
        return self.status == ACTIVE_EMPLOYEE_STATUS
