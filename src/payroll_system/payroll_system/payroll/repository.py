from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import PayrollBreakdown, PayrollRecord, SalarySlip


class PayrollRepository(Protocol):
    def exists(self, *, employee_id: int, period_start: date, period_end: date) -> bool:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        period_start: date,
        period_end: date,
        breakdown: PayrollBreakdown,
        created_at: datetime,
    ) -> int:
        """Insert a Pending payroll. Raises ConflictError when the period already exists."""

        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[PayrollRecord]:
        """Newest pay period first."""

        raise NotImplementedError

    def mark_paid(self, *, payroll_id: int, payment_date: datetime) -> bool:
        """Pending -> Paid. Returns False when the record was not Pending."""

        raise NotImplementedError


class SalarySlipRepository(Protocol):
    def get_by_payroll_id(self, payroll_id: int) -> Optional[SalarySlip]:
        raise NotImplementedError

    def create(
        self,
        *,
        payroll_id: int,
        employee_id: int,
        month: int,
        year: int,
        gross_earnings: Decimal,
        total_deductions: Decimal,
        net_pay: Decimal,
        generated_date: datetime,
    ) -> int:
        raise NotImplementedError
