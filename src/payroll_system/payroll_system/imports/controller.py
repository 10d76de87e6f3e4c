from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance/import", methods=["POST"], endpoint="upload_attendance_import")
    def upload_attendance_import():
        try:
            upload = request.files.get("file")
            if upload is None:
                raise ValidationError("Please select a file to upload")
            import_id = container.import_service.upload(file_name=upload.filename, content=upload.read())
            return jsonify({"success": True, "importId": import_id}), 202
        except Exception as e:
            return error_response(e)

    @app.route("/attendance/import/<import_id>/progress", methods=["GET"], endpoint="attendance_import_progress")
    def attendance_import_progress(import_id: str):
        try:
            progress = container.import_service.check_progress(import_id)
            return jsonify({"success": True, **progress.to_dict()})
        except Exception as e:
            return error_response(e)

    @app.route("/attendance/import/<import_id>/cancel", methods=["POST"], endpoint="cancel_attendance_import")
    def cancel_attendance_import(import_id: str):
        try:
            cancelled = container.import_service.cancel(import_id)
            return jsonify({"success": True, "cancelled": cancelled})
        except Exception as e:
            return error_response(e)
