from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, optional_date, optional_decimal, required_choice, required_date
from ..container import Container
from ..core.enums import AdjustmentType, CalculationMode
from .model import AllowanceDeductionRule


def _rule_from(data: dict) -> AllowanceDeductionRule:
    employee_id = data.get("employee_id")
    return AllowanceDeductionRule(
        rule_id=0,
        name=str(data.get("name") or ""),
        adjustment_type=required_choice(data, "adjustment_type", AdjustmentType),
        calculation_mode=required_choice(data, "calculation_mode", CalculationMode),
        effective_from=required_date(data, "effective_from"),
        effective_to=optional_date(data, "effective_to"),
        fixed_amount=optional_decimal(data, "fixed_amount"),
        percentage=optional_decimal(data, "percentage"),
        is_active=bool(data.get("is_active", True)),
        is_company_wide=bool(data.get("is_company_wide", True)),
        employee_id=int(employee_id) if str(employee_id or "").isdigit() else None,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/allowances", methods=["POST"], endpoint="create_allowance_deduction")
    def create_allowance_deduction():
        try:
            rule_id = container.allowance_service.create_rule(_rule_from(request.get_json(silent=True) or {}))
            return jsonify({"success": True, "message": "Allowance/deduction saved.", "rule_id": rule_id}), 201
        except Exception as e:
            return error_response(e)
