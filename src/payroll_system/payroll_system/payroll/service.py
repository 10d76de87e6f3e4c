from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..allowances.evaluator import AllowanceDeductionEvaluator
from ..allowances.model import AdjustmentLine
from ..attendance.aggregator import AttendanceAggregator
from ..common.datetime_utils import now_utc
from ..common.validators import require_period
from ..core.exceptions import ConflictError, NotFoundError
from ..employees.repository import EmployeeRepository
from ..leaves.aggregator import LeaveAggregator
from ..lookups.weekend import WeekendPolicyResolver
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollBreakdown, PayrollInputs, PayrollRecord, SalarySlip
from .repository import PayrollRepository
from .salary_slip import SalarySlipService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessedPayroll:
    payroll_id: int
    breakdown: PayrollBreakdown
    adjustments: tuple[AdjustmentLine, ...]


@dataclass(frozen=True)
class PaidPayroll:
    record: PayrollRecord
    salary_slip: Optional[SalarySlip]


class PayrollService:
    """Use case: compute and persist one payroll per (employee, pay period), then pay it."""

    def __init__(
        self,
        payrolls: PayrollRepository,
        employees: EmployeeRepository,
        *,
        weekends: WeekendPolicyResolver,
        leaves: LeaveAggregator,
        attendance: AttendanceAggregator,
        adjustments: AllowanceDeductionEvaluator,
        salary_slips: Optional[SalarySlipService] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._payrolls = payrolls
        self._employees = employees
        self._weekends = weekends
        self._leaves = leaves
        self._attendance = attendance
        self._adjustments = adjustments
        self._salary_slips = salary_slips
        self._calculator = calculator or StandardPayrollCalculator()

    def process_payroll(
        self,
        *,
        employee_id: int,
        period_start: date,
        period_end: date,
        now: Optional[datetime] = None,
    ) -> ProcessedPayroll:
        require_period(period_start, period_end)

        if self._payrolls.exists(employee_id=employee_id, period_start=period_start, period_end=period_end):
            logger.warning(
                "[payroll] duplicate period employee_id=%s period=%s..%s", employee_id, period_start, period_end
            )
            raise ConflictError("Payroll already exists for this employee and period.")

        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        weekend_days = self._weekends.resolve().count_in(period_start, period_end)
        leave = self._leaves.leave_days(employee_id=employee_id, start=period_start, end=period_end)
        present_days = self._attendance.count_present_days(employee_id=employee_id, start=period_start, end=period_end)
        totals = self._adjustments.evaluate(
            employee_id=employee_id,
            start=period_start,
            end=period_end,
            basic_salary=employee.basic_salary,
            present_days=present_days,
        )

        breakdown = self._calculator.calculate(
            PayrollInputs(
                period_start=period_start,
                period_end=period_end,
                basic_salary=employee.basic_salary,
                weekend_days=weekend_days,
                paid_leave_days=leave.paid_days,
                unpaid_leave_days=leave.unpaid_days,
                present_days=present_days,
                total_allowances=totals.total_allowances,
                total_deductions=totals.total_deductions,
            )
        )

        payroll_id = self._payrolls.create(
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            breakdown=breakdown,
            created_at=now or now_utc(),
        )
        logger.info(
            "[payroll] processed payroll_id=%s employee_id=%s period=%s..%s payable_days=%s net=%s",
            payroll_id,
            employee_id,
            period_start,
            period_end,
            breakdown.payable_days,
            breakdown.net_salary,
        )
        return ProcessedPayroll(payroll_id=payroll_id, breakdown=breakdown, adjustments=totals.lines)

    def mark_paid(self, *, payroll_id: int, now: Optional[datetime] = None) -> PaidPayroll:
        record = self.get(payroll_id)
        if record.is_paid:
            if self._salary_slips and self._salary_slips.find_for(payroll_id) is None:
                # Paid on an earlier call whose slip write failed.
                slip = self._salary_slips.issue_for(record, generated_at=record.payment_date or now or now_utc())
                logger.warning("[payroll] issued missing salary slip payroll_id=%s", payroll_id)
                return PaidPayroll(record=record, salary_slip=slip)
            raise ConflictError("Payroll is already marked as paid.")

        paid_at = now or now_utc()
        if not self._payrolls.mark_paid(payroll_id=payroll_id, payment_date=paid_at):
            # Lost a race with another caller marking the same payroll.
            raise ConflictError("Payroll is already marked as paid.")

        record = self.get(payroll_id)
        slip = self._salary_slips.issue_for(record, generated_at=paid_at) if self._salary_slips else None
        logger.info("[payroll] paid payroll_id=%s employee_id=%s", payroll_id, record.employee_id)
        return PaidPayroll(record=record, salary_slip=slip)

    def get(self, payroll_id: int) -> PayrollRecord:
        record = self._payrolls.get_by_id(payroll_id)
        if not record:
            raise NotFoundError(f"Payroll {payroll_id} not found")
        return record

    def list_payrolls(self) -> Sequence[PayrollRecord]:
        return self._payrolls.list_all()
