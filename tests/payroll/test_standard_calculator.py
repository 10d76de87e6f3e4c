from datetime import date
from decimal import Decimal

from payroll_system.payroll.calculator.standard_calculator import StandardPayrollCalculator
from payroll_system.payroll.model import PayrollInputs


def _inputs(**kw):
    values = {
        "period_start": date(2025, 1, 1),
        "period_end": date(2025, 1, 31),
        "basic_salary": Decimal("31000.00"),
        "weekend_days": 4,
    }
    values.update(kw)
    return PayrollInputs(**values)


def test_full_attendance_pays_full_salary():
    b = StandardPayrollCalculator().calculate(_inputs(present_days=27))

    assert (b.total_days, b.working_days, b.expected_attendance_days) == (31, 27, 27)
    assert (b.absent_days, b.payable_days) == (0, 31)
    assert b.daily_rate == Decimal("1000")
    assert b.pro_rated_salary == Decimal("31000.00")
    assert b.net_salary == Decimal("31000.00")


def test_absent_and_unpaid_days_reduce_pay():
    b = StandardPayrollCalculator().calculate(
        _inputs(
            present_days=20,
            paid_leave_days=2,
            unpaid_leave_days=3,
            total_allowances=Decimal("500.00"),
            total_deductions=Decimal("200.00"),
        )
    )

    assert b.expected_attendance_days == 22
    assert b.absent_days == 2
    assert b.payable_days == 26
    assert b.pro_rated_salary == Decimal("26000.00")
    assert b.net_salary == Decimal("26300.00")


def test_leave_beyond_working_days_is_floored():
    b = StandardPayrollCalculator().calculate(_inputs(paid_leave_days=20, unpaid_leave_days=10))

    assert b.expected_attendance_days == 0
    assert b.absent_days == 0
    assert b.payable_days == 21


def test_extra_present_days_do_not_go_negative():
    b = StandardPayrollCalculator().calculate(_inputs(present_days=30))

    assert b.absent_days == 0
    assert b.payable_days == 31


def test_pro_rated_salary_rounds_half_up():
    b = StandardPayrollCalculator().calculate(
        PayrollInputs(
            period_start=date(2025, 4, 1),
            period_end=date(2025, 4, 30),
            basic_salary=Decimal("1000.00"),
            present_days=29,
        )
    )

    assert b.payable_days == 29
    assert b.pro_rated_salary == Decimal("966.67")


def test_deductions_can_make_net_negative():
    b = StandardPayrollCalculator().calculate(
        _inputs(present_days=0, unpaid_leave_days=27, total_deductions=Decimal("5000.00"))
    )

    assert b.payable_days == 4
    assert b.net_salary == Decimal("-1000.00")
