from __future__ import annotations

from datetime import date
from decimal import Decimal

from ..common.money import ZERO
from ..core.constants import ALLOWANCE_MIN_PRESENT_DAYS
from ..core.enums import AdjustmentType
from .model import AdjustmentLine, AdjustmentTotals
from .repository import AllowanceDeductionRepository


class AllowanceDeductionEvaluator:
    """Totals the allowances and deductions that apply to one employee and period.

    Deductions always count. Allowances count only when the employee was present
    on at least ALLOWANCE_MIN_PRESENT_DAYS days of the period.
    """

    def __init__(self, rules: AllowanceDeductionRepository):
        self._rules = rules

    def evaluate(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        basic_salary: Decimal,
        present_days: int,
    ) -> AdjustmentTotals:
        allowances = ZERO
        deductions = ZERO
        lines: list[AdjustmentLine] = []
        allowances_earned = present_days >= ALLOWANCE_MIN_PRESENT_DAYS

        for rule in self._rules.list_effective(employee_id=employee_id, start=start, end=end):
            if not rule.applies_to(employee_id=employee_id, start=start, end=end):
                continue

            amount = rule.amount_for(basic_salary)
            if rule.adjustment_type == AdjustmentType.DEDUCTION:
                deductions += amount
                applied = True
            else:
                applied = allowances_earned
                if applied:
                    allowances += amount

            lines.append(
                AdjustmentLine(
                    rule_id=rule.rule_id,
                    name=rule.name,
                    adjustment_type=rule.adjustment_type,
                    amount=amount,
                    applied=applied,
                )
            )

        return AdjustmentTotals(total_allowances=allowances, total_deductions=deductions, lines=tuple(lines))
