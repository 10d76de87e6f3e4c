from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.http import error_response, required_date, required_int, to_json
from ..container import Container
from .export import XLSX_MIMETYPE, build_payroll_register


def register(app: Flask, container: Container) -> None:
    @app.route("/payroll/process", methods=["POST"], endpoint="process_payroll")
    def process_payroll():
        try:
            data = request.get_json(silent=True) or {}
            result = container.payroll_service.process_payroll(
                employee_id=required_int(data, "employee_id"),
                period_start=required_date(data, "period_start"),
                period_end=required_date(data, "period_end"),
            )
            return jsonify({
                "success": True,
                "message": "Payroll processed successfully.",
                "payroll_id": result.payroll_id,
                "breakdown": to_json(result.breakdown),
                "adjustments": to_json(result.adjustments),
            }), 201
        except Exception as e:
            return error_response(e)

    @app.route("/payroll", methods=["GET"], endpoint="list_payrolls")
    def list_payrolls():
        try:
            records = container.payroll_service.list_payrolls()
            return jsonify({"success": True, "payrolls": to_json(list(records))})
        except Exception as e:
            return error_response(e)

    @app.route("/payroll/<int:payroll_id>", methods=["GET"], endpoint="payroll_details")
    def payroll_details(payroll_id: int):
        try:
            record = container.payroll_service.get(payroll_id)
            return jsonify({"success": True, "payroll": to_json(record)})
        except Exception as e:
            return error_response(e)

    @app.route("/payroll/<int:payroll_id>/mark-paid", methods=["POST"], endpoint="mark_payroll_paid")
    def mark_payroll_paid(payroll_id: int):
        try:
            paid = container.payroll_service.mark_paid(payroll_id=payroll_id)
            return jsonify({
                "success": True,
                "message": "Payroll marked as paid.",
                "payroll": to_json(paid.record),
                "salary_slip": to_json(paid.salary_slip),
            })
        except Exception as e:
            return error_response(e)

    @app.route("/payroll/export", methods=["GET"], endpoint="export_payrolls")
    def export_payrolls():
        try:
            records = container.payroll_service.list_payrolls()
            employees = {e.employee_id: e for e in container.employees_repo.list_all()}
            output = build_payroll_register(records, employees)
            return send_file(output, download_name="payroll_register.xlsx", as_attachment=True, mimetype=XLSX_MIMETYPE)
        except Exception as e:
            return error_response(e)
