from __future__ import annotations

from dataclasses import replace

from ..common.money import ZERO, round_money
from ..common.validators import require_non_empty
from ..core.constants import MAX_FIXED_AMOUNT, MAX_PERCENTAGE
from ..core.enums import CalculationMode
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import AllowanceDeductionRule
from .repository import AllowanceDeductionRepository


class AllowanceDeductionService:
    """Use case: maintain allowance/deduction master data."""

    def __init__(self, rules: AllowanceDeductionRepository, employees: EmployeeRepository):
        self._rules = rules
        self._employees = employees

    @staticmethod
    def normalize(rule: AllowanceDeductionRule) -> AllowanceDeductionRule:
        """Validate a rule and zero the amount its calculation mode does not use."""
        name = require_non_empty(rule.name, "Name")
        errors: list[str] = []

        if rule.calculation_mode == CalculationMode.PERCENTAGE:
            if not (0 <= rule.percentage <= MAX_PERCENTAGE):
                errors.append(f"Percentage must be between 0% and {MAX_PERCENTAGE}%.")
            rule = replace(rule, fixed_amount=ZERO)
        else:
            if not (0 <= rule.fixed_amount <= round_money(MAX_FIXED_AMOUNT)):
                errors.append(f"Fixed Amount must be between 0 and {MAX_FIXED_AMOUNT:,.2f}.")
            rule = replace(rule, percentage=ZERO)

        if rule.effective_to is not None and rule.effective_to < rule.effective_from:
            errors.append("Effective To date must be after Effective From date.")

        if rule.is_company_wide:
            rule = replace(rule, employee_id=None)
        elif not rule.employee_id:
            errors.append("Employee is required for employee-specific allowance/deduction.")

        if errors:
            raise ValidationError("\n".join(errors))
        return replace(rule, name=name)

    def create_rule(self, rule: AllowanceDeductionRule) -> int:
        rule = self.normalize(rule)
        if rule.employee_id is not None and not self._employees.get_by_id(rule.employee_id):
            raise NotFoundError("Selected employee does not exist.")
        return self._rules.create(rule)
