from datetime import date
from decimal import Decimal

import pytest

from payroll_system.allowances.evaluator import AllowanceDeductionEvaluator
from payroll_system.allowances.model import AllowanceDeductionRule
from payroll_system.allowances.service import AllowanceDeductionService
from payroll_system.core.enums import AdjustmentType, CalculationMode
from payroll_system.core.exceptions import NotFoundError, ValidationError

JAN_START, JAN_END = date(2025, 1, 1), date(2025, 1, 31)


def _rule(rule_id, adjustment_type, mode=CalculationMode.FIXED, **kw):
    values = {
        "rule_id": rule_id,
        "name": f"Rule {rule_id}",
        "adjustment_type": adjustment_type,
        "calculation_mode": mode,
        "effective_from": date(2024, 1, 1),
    }
    values.update(kw)
    return AllowanceDeductionRule(**values)


@pytest.fixture
def rules(allowances):
    allowances.rules.extend(
        [
            _rule(1, AdjustmentType.ALLOWANCE, fixed_amount=Decimal("500.00")),
            _rule(2, AdjustmentType.ALLOWANCE, CalculationMode.PERCENTAGE, percentage=Decimal("10")),
            _rule(3, AdjustmentType.DEDUCTION, fixed_amount=Decimal("200.00")),
            _rule(4, AdjustmentType.DEDUCTION, fixed_amount=Decimal("50.00"), is_company_wide=False, employee_id=2),
            _rule(5, AdjustmentType.DEDUCTION, fixed_amount=Decimal("75.00"), effective_to=date(2024, 12, 31)),
            _rule(6, AdjustmentType.ALLOWANCE, fixed_amount=Decimal("999.00"), is_active=False),
        ]
    )
    return allowances


def test_allowances_paid_from_seven_present_days(rules):
    totals = AllowanceDeductionEvaluator(rules).evaluate(
        employee_id=1, start=JAN_START, end=JAN_END, basic_salary=Decimal("31000.00"), present_days=7
    )

    assert totals.total_allowances == Decimal("3600.00")
    assert totals.total_deductions == Decimal("200.00")
    assert [line.rule_id for line in totals.lines] == [1, 2, 3]


def test_allowances_withheld_below_threshold_but_deductions_apply(rules):
    totals = AllowanceDeductionEvaluator(rules).evaluate(
        employee_id=1, start=JAN_START, end=JAN_END, basic_salary=Decimal("31000.00"), present_days=6
    )

    assert totals.total_allowances == Decimal("0.00")
    assert totals.total_deductions == Decimal("200.00")
    assert [line.applied for line in totals.lines] == [False, False, True]


def test_employee_specific_rule_applies_to_that_employee_only(rules):
    totals = AllowanceDeductionEvaluator(rules).evaluate(
        employee_id=2, start=JAN_START, end=JAN_END, basic_salary=Decimal("10000.00"), present_days=0
    )

    assert totals.total_deductions == Decimal("250.00")


def test_normalize_clears_unused_fields():
    rule = AllowanceDeductionService.normalize(
        _rule(
            0,
            AdjustmentType.ALLOWANCE,
            CalculationMode.PERCENTAGE,
            name="  Housing ",
            percentage=Decimal("15"),
            fixed_amount=Decimal("100"),
            employee_id=7,
        )
    )

    assert rule.name == "Housing"
    assert rule.fixed_amount == Decimal("0.00")
    assert rule.employee_id is None


def test_normalize_rejects_invalid_rule():
    with pytest.raises(ValidationError) as exc_info:
        AllowanceDeductionService.normalize(
            _rule(
                0,
                AdjustmentType.DEDUCTION,
                CalculationMode.PERCENTAGE,
                percentage=Decimal("150"),
                effective_to=date(2023, 1, 1),
                is_company_wide=False,
            )
        )

    message = str(exc_info.value)
    assert "Percentage" in message
    assert "Effective To" in message
    assert "Employee is required" in message


def test_create_rule_for_missing_employee(allowances, employees):
    service = AllowanceDeductionService(allowances, employees)

    with pytest.raises(NotFoundError):
        service.create_rule(_rule(0, AdjustmentType.ALLOWANCE, is_company_wide=False, employee_id=42))

    rule_id = service.create_rule(_rule(0, AdjustmentType.ALLOWANCE, is_company_wide=False, employee_id=1))
    assert allowances.rules[rule_id - 1].employee_id == 1
