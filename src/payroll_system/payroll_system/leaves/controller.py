from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, required_date, required_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/leaves", methods=["POST"], endpoint="apply_leave")
    def apply_leave():
        try:
            data = request.get_json(silent=True) or {}
            leave_id = container.leave_service.apply(
                employee_id=required_int(data, "employee_id"),
                leave_type=str(data.get("leave_type") or ""),
                start_date=required_date(data, "start_date"),
                end_date=required_date(data, "end_date"),
                remarks=data.get("remarks"),
            )
            return jsonify({"success": True, "message": "Leave request submitted.", "leave_id": leave_id}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/leaves/<int:leave_id>/approve", methods=["POST"], endpoint="approve_leave")
    def approve_leave(leave_id: int):
        try:
            data = request.get_json(silent=True) or {}
            container.leave_service.approve(leave_id=leave_id, remarks=data.get("remarks"))
            return jsonify({"success": True, "message": "Leave approved."})
        except Exception as e:
            return error_response(e)

    @app.route("/leaves/<int:leave_id>/reject", methods=["POST"], endpoint="reject_leave")
    def reject_leave(leave_id: int):
        try:
            data = request.get_json(silent=True) or {}
            container.leave_service.reject(leave_id=leave_id, remarks=data.get("remarks"))
            return jsonify({"success": True, "message": "Leave rejected."})
        except Exception as e:
            return error_response(e)
