from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AllowanceDeductionRule


class AllowanceDeductionRepository(Protocol):
    def list_effective(self, *, employee_id: int, start: date, end: date) -> Sequence[AllowanceDeductionRule]:
        """Active rules effective somewhere in [start, end], company-wide or bound to the employee."""

        raise NotImplementedError

    def create(self, rule: AllowanceDeductionRule) -> int:
        raise NotImplementedError
