import io
from types import SimpleNamespace

import pytest
from flask import Flask
from openpyxl import Workbook

from payroll_system.allowances.evaluator import AllowanceDeductionEvaluator
from payroll_system.attendance.aggregator import AttendanceAggregator
from payroll_system.attendance.service import AttendanceService
from payroll_system.imports.controller import register as register_imports
from payroll_system.imports.reconciler import PunchReconciler
from payroll_system.imports.runner import ImportJobRunner
from payroll_system.imports.service import AttendanceImportService
from payroll_system.leaves.aggregator import LeaveAggregator
from payroll_system.lookups.weekend import WeekendPolicyResolver
from payroll_system.payroll.controller import register as register_payroll
from payroll_system.payroll.export import XLSX_MIMETYPE
from payroll_system.payroll.salary_slip import SalarySlipService
from payroll_system.payroll.service import PayrollService


@pytest.fixture
def client(payrolls, employees, sunday_lookups, leaves, attendance, allowances, salary_slips, shifts, import_jobs):
    weekends = WeekendPolicyResolver(sunday_lookups)
    runner = ImportJobRunner(import_jobs, max_workers=1)
    reconciler = PunchReconciler(
        import_jobs,
        employees,
        attendance,
        AttendanceService(attendance, employees, shifts, leaves),
        weekends=weekends,
    )
    container = SimpleNamespace(
        employees_repo=employees,
        import_runner=runner,
        import_service=AttendanceImportService(import_jobs, reconciler, runner),
        payroll_service=PayrollService(
            payrolls,
            employees,
            weekends=weekends,
            leaves=LeaveAggregator(leaves),
            attendance=AttendanceAggregator(attendance),
            adjustments=AllowanceDeductionEvaluator(allowances),
            salary_slips=SalarySlipService(salary_slips),
        ),
    )
    app = Flask(__name__)
    register_payroll(app, container)
    register_imports(app, container)
    yield app.test_client()
    runner.shutdown()


BODY = {"employee_id": 1, "period_start": "2025-01-01", "period_end": "2025-01-31"}


def test_process_then_duplicate(client):
    first = client.post("/payroll/process", json=BODY)
    assert first.status_code == 201
    assert first.get_json()["breakdown"]["total_days"] == 31
    assert first.get_json()["breakdown"]["net_salary"] == "4000.00"

    second = client.post("/payroll/process", json=BODY)
    assert second.status_code == 409
    assert second.get_json() == {"success": False, "message": "Payroll already exists for this employee and period."}


def test_bad_request_and_not_found(client):
    assert client.post("/payroll/process", json={"employee_id": "x"}).status_code == 400
    assert client.post("/payroll/process", json={**BODY, "period_end": "2024-12-31"}).status_code == 400
    assert client.post("/payroll/process", json={**BODY, "employee_id": 99}).status_code == 404
    assert client.get("/payroll/12345").status_code == 404


def test_mark_paid_twice(client):
    payroll_id = client.post("/payroll/process", json=BODY).get_json()["payroll_id"]

    paid = client.post(f"/payroll/{payroll_id}/mark-paid")
    assert paid.status_code == 200
    assert paid.get_json()["payroll"]["payment_status"] == "Paid"
    assert paid.get_json()["salary_slip"]["month"] == 1

    assert client.post(f"/payroll/{payroll_id}/mark-paid").status_code == 409


def test_list_and_export(client):
    client.post("/payroll/process", json=BODY)

    listed = client.get("/payroll").get_json()["payrolls"]
    assert [p["employee_id"] for p in listed] == [1]

    exported = client.get("/payroll/export")
    assert exported.status_code == 200
    assert exported.mimetype == XLSX_MIMETYPE


def test_import_upload_and_progress(client):
    wb = Workbook()
    wb.active.append(["Mid", "Date", "Time"])
    wb.active.append([101, "2025-01-06", "09:00"])
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)

    uploaded = client.post(
        "/attendance/import", data={"file": (buf, "punches.xlsx")}, content_type="multipart/form-data"
    )
    assert uploaded.status_code == 202
    import_id = uploaded.get_json()["importId"]

    progress = client.get(f"/attendance/import/{import_id}/progress")
    assert progress.status_code == 200
    assert progress.get_json()["status"] in {"Pending", "Processing", "Saving", "Completed"}

    assert client.get("/attendance/import/unknown/progress").status_code == 404
    assert client.post("/attendance/import", data={}, content_type="multipart/form-data").status_code == 400
