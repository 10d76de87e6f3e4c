from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.money import to_decimal
from ..core.enums import AdjustmentType, CalculationMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, unique_violation_as_conflict
from .model import AllowanceDeductionRule
from .repository import AllowanceDeductionRepository


class MySQLAllowanceDeductionRepository(AllowanceDeductionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_effective(self, *, employee_id: int, start: date, end: date) -> Sequence[AllowanceDeductionRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rule_id, name, adjustment_type, calculation_mode, fixed_amount, percentage,
                       effective_from, effective_to, is_active, is_company_wide, employee_id
                FROM allowance_deductions
                WHERE is_active=1
                  AND effective_from<=%s
                  AND (effective_to IS NULL OR effective_to>=%s)
                  AND (is_company_wide=1 OR employee_id=%s)
                ORDER BY adjustment_type, name
                """,
                (end, start, int(employee_id)),
            )
            return [
                AllowanceDeductionRule(
                    rule_id=int(r["rule_id"]),
                    name=r["name"],
                    adjustment_type=AdjustmentType(r["adjustment_type"]),
                    calculation_mode=CalculationMode(r["calculation_mode"]),
                    effective_from=r["effective_from"],
                    effective_to=r.get("effective_to"),
                    fixed_amount=to_decimal(r.get("fixed_amount")),
                    percentage=to_decimal(r.get("percentage")),
                    is_active=bool(r.get("is_active")),
                    is_company_wide=bool(r.get("is_company_wide")),
                    employee_id=int(r["employee_id"]) if r.get("employee_id") is not None else None,
                )
                for r in fetchall(cur)
            ]

    def create(self, rule: AllowanceDeductionRule) -> int:
        with unique_violation_as_conflict("An allowance/deduction with this name already exists for the same scope"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO allowance_deductions(
                        name, adjustment_type, calculation_mode, fixed_amount, percentage,
                        effective_from, effective_to, is_active, is_company_wide, employee_id
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        rule.name,
                        rule.adjustment_type.value,
                        rule.calculation_mode.value,
                        rule.fixed_amount,
                        rule.percentage,
                        rule.effective_from,
                        rule.effective_to,
                        int(rule.is_active),
                        int(rule.is_company_wide),
                        rule.employee_id,
                    ),
                )
                return int(cur.lastrowid)
