from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO, round_money
from ..core.enums import AdjustmentType, CalculationMode


@dataclass(frozen=True)
class AllowanceDeductionRule:
    """Master-data rule. Only one of fixed_amount / percentage is meaningful per mode."""

    rule_id: int
    name: str
    adjustment_type: AdjustmentType
    calculation_mode: CalculationMode
    effective_from: date
    effective_to: Optional[date] = None
    fixed_amount: Decimal = ZERO
    percentage: Decimal = ZERO
    is_active: bool = True
    is_company_wide: bool = True
    employee_id: Optional[int] = None

    def applies_to(self, *, employee_id: int, start: date, end: date) -> bool:
        if not self.is_active or self.effective_from > end:
            return False
        if self.effective_to is not None and self.effective_to < start:
            return False
        return self.is_company_wide or self.employee_id == employee_id

    def amount_for(self, basic_salary: Decimal) -> Decimal:
        """Fixed amount, or a percentage of the full (not pro-rated) basic salary."""
        if self.calculation_mode == CalculationMode.PERCENTAGE:
            return round_money(self.percentage / Decimal(100) * basic_salary)
        return self.fixed_amount


@dataclass(frozen=True)
class AdjustmentLine:
    rule_id: int
    name: str
    adjustment_type: AdjustmentType
    amount: Decimal
    applied: bool


@dataclass(frozen=True)
class AdjustmentTotals:
    total_allowances: Decimal = ZERO
    total_deductions: Decimal = ZERO
    lines: tuple[AdjustmentLine, ...] = field(default_factory=tuple)
