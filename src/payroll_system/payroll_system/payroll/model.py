from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO
from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class PayrollInputs:
    """Everything the calculator needs, already gathered from the aggregators."""

    period_start: date
    period_end: date
    basic_salary: Decimal
    weekend_days: int = 0
    paid_leave_days: int = 0
    unpaid_leave_days: int = 0
    present_days: int = 0
    total_allowances: Decimal = ZERO
    total_deductions: Decimal = ZERO


@dataclass(frozen=True)
class PayrollBreakdown:
    total_days: int
    weekend_days: int
    working_days: int
    expected_attendance_days: int
    present_days: int
    paid_leave_days: int
    unpaid_leave_days: int
    absent_days: int
    payable_days: int
    basic_salary: Decimal
    daily_rate: Decimal
    pro_rated_salary: Decimal
    total_allowances: Decimal
    total_deductions: Decimal
    net_salary: Decimal


@dataclass(frozen=True)
class PayrollRecord:
    """Domain entity: persisted payroll for one employee and pay period."""

    payroll_id: int
    employee_id: int
    pay_period_start: date
    pay_period_end: date
    total_days: int
    present_days: int
    paid_leave_days: int
    unpaid_leave_days: int
    absent_days: int
    payable_days: int
    basic_salary: Decimal
    total_allowances: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID


@dataclass(frozen=True)
class SalarySlip:
    salary_slip_id: int
    payroll_id: int
    employee_id: int
    month: int
    year: int
    gross_earnings: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    generated_date: datetime
