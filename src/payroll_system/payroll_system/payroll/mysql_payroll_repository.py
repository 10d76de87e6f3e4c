from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import PaymentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as_conflict
from .model import PayrollBreakdown, PayrollRecord, SalarySlip
from .repository import PayrollRepository, SalarySlipRepository

_PAYROLL_COLUMNS = """
    payroll_id, employee_id, pay_period_start, pay_period_end,
    total_days, present_days, paid_leave_days, unpaid_leave_days, absent_days, payable_days,
    basic_salary, total_allowances, total_deductions, net_salary,
    payment_status, payment_date, created_at
"""


def _to_payroll(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        employee_id=int(r["employee_id"]),
        pay_period_start=r["pay_period_start"],
        pay_period_end=r["pay_period_end"],
        total_days=int(r["total_days"]),
        present_days=int(r["present_days"]),
        paid_leave_days=int(r["paid_leave_days"]),
        unpaid_leave_days=int(r["unpaid_leave_days"]),
        absent_days=int(r["absent_days"]),
        payable_days=int(r["payable_days"]),
        basic_salary=to_decimal(r["basic_salary"]),
        total_allowances=to_decimal(r["total_allowances"]),
        total_deductions=to_decimal(r["total_deductions"]),
        net_salary=to_decimal(r["net_salary"]),
        payment_status=PaymentStatus(r["payment_status"]),
        payment_date=r.get("payment_date"),
        created_at=r.get("created_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, *, employee_id: int, period_start: date, period_end: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS hit FROM payrolls
                WHERE employee_id=%s AND pay_period_start=%s AND pay_period_end=%s
                LIMIT 1
                """,
                (int(employee_id), period_start, period_end),
            )
            return fetchone(cur) is not None

    def create(
        self,
        *,
        employee_id: int,
        period_start: date,
        period_end: date,
        breakdown: PayrollBreakdown,
        created_at: datetime,
    ) -> int:
        b = breakdown
        with unique_violation_as_conflict("Payroll already exists for this employee and period"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payrolls(
                        employee_id, pay_period_start, pay_period_end,
                        total_days, present_days, paid_leave_days, unpaid_leave_days, absent_days, payable_days,
                        basic_salary, total_allowances, total_deductions, net_salary,
                        payment_status, created_at, updated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(employee_id),
                        period_start,
                        period_end,
                        b.total_days,
                        b.present_days,
                        b.paid_leave_days,
                        b.unpaid_leave_days,
                        b.absent_days,
                        b.payable_days,
                        b.basic_salary,
                        b.total_allowances,
                        b.total_deductions,
                        b.net_salary,
                        PaymentStatus.PENDING.value,
                        created_at,
                        created_at,
                    ),
                )
                return int(cur.lastrowid)

    def get_by_id(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PAYROLL_COLUMNS} FROM payrolls WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_payroll(r) if r else None

    def list_all(self) -> Sequence[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_PAYROLL_COLUMNS} FROM payrolls ORDER BY pay_period_start DESC, payroll_id DESC")
            return [_to_payroll(r) for r in fetchall(cur)]

    def mark_paid(self, *, payroll_id: int, payment_date: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE payrolls
                SET payment_status=%s, payment_date=%s, updated_at=%s
                WHERE payroll_id=%s AND payment_status=%s
                """,
                (PaymentStatus.PAID.value, payment_date, payment_date, int(payroll_id), PaymentStatus.PENDING.value),
            )
            return cur.rowcount > 0


class MySQLSalarySlipRepository(SalarySlipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_payroll_id(self, payroll_id: int) -> Optional[SalarySlip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT salary_slip_id, payroll_id, employee_id, month, year,
                       gross_earnings, total_deductions, net_pay, generated_date
                FROM salary_slips
                WHERE payroll_id=%s
                """,
                (int(payroll_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SalarySlip(
                salary_slip_id=int(r["salary_slip_id"]),
                payroll_id=int(r["payroll_id"]),
                employee_id=int(r["employee_id"]),
                month=int(r["month"]),
                year=int(r["year"]),
                gross_earnings=to_decimal(r["gross_earnings"]),
                total_deductions=to_decimal(r["total_deductions"]),
                net_pay=to_decimal(r["net_pay"]),
                generated_date=r["generated_date"],
            )

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
        with unique_violation_as_conflict(f"Salary slip already exists for payroll {payroll_id}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO salary_slips(
                        payroll_id, employee_id, month, year,
                        gross_earnings, total_deductions, net_pay, generated_date
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(payroll_id),
                        int(employee_id),
                        int(month),
                        int(year),
                        gross_earnings,
                        total_deductions,
                        net_pay,
                        generated_date,
                    ),
                )
                return int(cur.lastrowid)
