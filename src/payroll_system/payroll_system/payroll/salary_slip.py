from __future__ import annotations

from datetime import datetime
from typing import Optional

from .model import PayrollRecord, SalarySlip
from .repository import SalarySlipRepository


class SalarySlipService:
    """Issues one salary slip per paid payroll."""

    def __init__(self, slips: SalarySlipRepository):
        self._slips = slips

    def find_for(self, payroll_id: int) -> Optional[SalarySlip]:
        return self._slips.get_by_payroll_id(payroll_id)

    def issue_for(self, record: PayrollRecord, *, generated_at: datetime) -> SalarySlip:
        existing = self.find_for(record.payroll_id)
        if existing:
            return existing

        gross = record.basic_salary + record.total_allowances
        slip_id = self._slips.create(
            payroll_id=record.payroll_id,
            employee_id=record.employee_id,
            month=record.pay_period_start.month,
            year=record.pay_period_start.year,
            gross_earnings=gross,
            total_deductions=record.total_deductions,
            net_pay=record.net_salary,
            generated_date=generated_at,
        )
        return SalarySlip(
            salary_slip_id=slip_id,
            payroll_id=record.payroll_id,
            employee_id=record.employee_id,
            month=record.pay_period_start.month,
            year=record.pay_period_start.year,
            gross_earnings=gross,
            total_deductions=record.total_deductions,
            net_pay=record.net_salary,
            generated_date=generated_at,
        )
