from __future__ import annotations

from decimal import Decimal

from ...common.money import ZERO, round_money
from ..model import PayrollBreakdown, PayrollInputs
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: salary pro-rated over calendar days, minus unpaid and absent days.

    Absent and payable days are floored at 0, so the day counts are not
    guaranteed to add up to total_days.
    """

    def calculate(self, inputs: PayrollInputs) -> PayrollBreakdown:
        total_days = (inputs.period_end - inputs.period_start).days + 1
        working_days = total_days - inputs.weekend_days
        expected = max(0, working_days - inputs.paid_leave_days - inputs.unpaid_leave_days)
        absent_days = max(0, expected - inputs.present_days)
        payable_days = max(0, total_days - inputs.unpaid_leave_days - absent_days)

        daily_rate = inputs.basic_salary / Decimal(total_days) if total_days > 0 else ZERO
        pro_rated = round_money(daily_rate * payable_days)
        net = pro_rated + inputs.total_allowances - inputs.total_deductions

        return PayrollBreakdown(
            total_days=total_days,
            weekend_days=inputs.weekend_days,
            working_days=working_days,
            expected_attendance_days=expected,
            present_days=inputs.present_days,
            paid_leave_days=inputs.paid_leave_days,
            unpaid_leave_days=inputs.unpaid_leave_days,
            absent_days=absent_days,
            payable_days=payable_days,
            basic_salary=inputs.basic_salary,
            daily_rate=daily_rate,
            pro_rated_salary=pro_rated,
            total_allowances=inputs.total_allowances,
            total_deductions=inputs.total_deductions,
            net_salary=net,
        )
