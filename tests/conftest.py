from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from payroll_system.allowances.model import AllowanceDeductionRule
from payroll_system.attendance.model import AttendanceRecord
from payroll_system.common.datetime_utils import now_utc
from payroll_system.core.enums import AttendanceStatus, ImportStatus, LeaveStatus, PaymentStatus
from payroll_system.core.exceptions import ConflictError
from payroll_system.employees.model import Employee
from payroll_system.imports.model import ImportJob
from payroll_system.leaves.model import LeaveRequest
from payroll_system.lookups.model import Lookup
from payroll_system.payroll.model import PayrollRecord, SalarySlip
from payroll_system.shifts.model import Shift


class FakeEmployeesRepo:
    def __init__(self, employees=()):
        self._by_id = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self._by_id[employee.employee_id] = employee
        return employee

    def get_by_id(self, employee_id):
        return self._by_id.get(int(employee_id))

    def list_with_machine_code(self):
        return [e for e in self._by_id.values() if e.machine_code is not None]

    def list_all(self):
        return list(self._by_id.values())


class FakeLookupsRepo:
    def __init__(self, entries=()):
        self.entries = list(entries)

    def list_by_type(self, lookup_type):
        return [e for e in self.entries if e.lookup_type == lookup_type]


class FakeShiftsRepo:
    def __init__(self, shifts=()):
        self._by_id = {s.shift_id: s for s in shifts}

    def get_by_id(self, shift_id):
        return self._by_id.get(int(shift_id))


class FakeLeavesRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, LeaveRequest] = {}

    def add(self, *, employee_id, leave_type, start_date, end_date, status=LeaveStatus.APPROVED) -> LeaveRequest:
        leave_id = self.create(
            employee_id=employee_id, leave_type=leave_type, start_date=start_date, end_date=end_date, status=status
        )
        return self.rows[leave_id]

    def list_approved_in_period(self, *, employee_id, start, end):
        return [
            r
            for r in self.rows.values()
            if r.employee_id == employee_id
            and r.status == LeaveStatus.APPROVED
            and r.start_date <= end
            and r.end_date >= start
        ]

    def has_overlap(self, *, employee_id, start, end, exclude_leave_id=None):
        return any(
            r.employee_id == employee_id
            and r.status != LeaveStatus.REJECTED
            and r.leave_id != exclude_leave_id
            and r.start_date <= end
            and r.end_date >= start
            for r in self.rows.values()
        )

    def get_by_id(self, leave_id):
        return self.rows.get(int(leave_id))

    def create(self, *, employee_id, leave_type, start_date, end_date, status, remarks=None):
        leave_id = self._next_id
        self._next_id += 1
        self.rows[leave_id] = LeaveRequest(
            leave_id=leave_id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            status=status,
            remarks=remarks,
        )
        return leave_id

    def update_status(self, *, leave_id, status, remarks=None):
        row = self.rows.get(int(leave_id))
        if not row:
            return False
        self.rows[leave_id] = replace(row, status=status, remarks=remarks)
        return True


class FakeAttendanceRepo:
    def __init__(self):
        self._next_id = 1
        self._lock = threading.Lock()
        self.rows: dict[tuple[int, date], AttendanceRecord] = {}

    def add_present(self, employee_id: int, *days: date) -> None:
        for d in days:
            self.create(
                employee_id=employee_id,
                attendance_date=d,
                shift_id=1,
                in_time=time(9, 0),
                out_time=time(18, 0),
                status=AttendanceStatus.PRESENT,
                working_hours=Decimal("9.00"),
                late_entry=None,
                early_leave=None,
            )

    def get_for_employee_and_date(self, employee_id, attendance_date):
        return self.rows.get((employee_id, attendance_date))

    def exists(self, employee_id, attendance_date):
        return (employee_id, attendance_date) in self.rows

    def list_present_dates(self, *, employee_id, start, end):
        return [
            d
            for (emp, d), r in self.rows.items()
            if emp == employee_id and start <= d <= end and r.status == AttendanceStatus.PRESENT
        ]

    def create(
        self,
        *,
        employee_id,
        attendance_date,
        shift_id,
        in_time,
        out_time,
        status,
        working_hours,
        late_entry,
        early_leave,
    ):
        with self._lock:
            key = (employee_id, attendance_date)
            if key in self.rows:
                raise ConflictError("Attendance record already exists")
            attendance_id = self._next_id
            self._next_id += 1
            self.rows[key] = AttendanceRecord(
                attendance_id=attendance_id,
                employee_id=employee_id,
                attendance_date=attendance_date,
                in_time=in_time,
                out_time=out_time,
                status=status,
                shift_id=shift_id,
                working_hours=working_hours,
                late_entry=late_entry,
                early_leave=early_leave,
            )
            return attendance_id


class FakeAllowancesRepo:
    def __init__(self, rules=()):
        self.rules: list[AllowanceDeductionRule] = list(rules)

    def list_effective(self, *, employee_id, start, end):
        return [r for r in self.rules if r.applies_to(employee_id=employee_id, start=start, end=end)]

    def create(self, rule):
        rule_id = len(self.rules) + 1
        self.rules.append(replace(rule, rule_id=rule_id))
        return rule_id


class FakePayrollRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, PayrollRecord] = {}

    def exists(self, *, employee_id, period_start, period_end):
        return any(
            r.employee_id == employee_id and r.pay_period_start == period_start and r.pay_period_end == period_end
            for r in self.rows.values()
        )

    def create(self, *, employee_id, period_start, period_end, breakdown, created_at):
        if self.exists(employee_id=employee_id, period_start=period_start, period_end=period_end):
            raise ConflictError("Payroll already exists for this employee and period.")
        payroll_id = self._next_id
        self._next_id += 1
        self.rows[payroll_id] = PayrollRecord(
            payroll_id=payroll_id,
            employee_id=employee_id,
            pay_period_start=period_start,
            pay_period_end=period_end,
            total_days=breakdown.total_days,
            present_days=breakdown.present_days,
            paid_leave_days=breakdown.paid_leave_days,
            unpaid_leave_days=breakdown.unpaid_leave_days,
            absent_days=breakdown.absent_days,
            payable_days=breakdown.payable_days,
            basic_salary=breakdown.basic_salary,
            total_allowances=breakdown.total_allowances,
            total_deductions=breakdown.total_deductions,
            net_salary=breakdown.net_salary,
            created_at=created_at,
        )
        return payroll_id

    def get_by_id(self, payroll_id):
        return self.rows.get(int(payroll_id))

    def list_all(self):
        return sorted(self.rows.values(), key=lambda r: (r.pay_period_start, r.payroll_id), reverse=True)

    def mark_paid(self, *, payroll_id, payment_date):
        row = self.rows.get(int(payroll_id))
        if not row or row.payment_status != PaymentStatus.PENDING:
            return False
        self.rows[payroll_id] = replace(row, payment_status=PaymentStatus.PAID, payment_date=payment_date)
        return True


class FakeSalarySlipRepo:
    def __init__(self):
        self.rows: dict[int, SalarySlip] = {}

    def get_by_payroll_id(self, payroll_id):
        return next((s for s in self.rows.values() if s.payroll_id == payroll_id), None)

    def create(self, *, payroll_id, employee_id, month, year, gross_earnings, total_deductions, net_pay, generated_date):
        slip_id = len(self.rows) + 1
        self.rows[slip_id] = SalarySlip(
            salary_slip_id=slip_id,
            payroll_id=payroll_id,
            employee_id=employee_id,
            month=month,
            year=year,
            gross_earnings=gross_earnings,
            total_deductions=total_deductions,
            net_pay=net_pay,
            generated_date=generated_date,
        )
        return slip_id


class FakeImportJobsRepo:
    def __init__(self):
        self._lock = threading.Lock()
        self.jobs: dict[str, ImportJob] = {}
        self.history: list[tuple[int, int, ImportStatus]] = []

    def create(self, *, import_id, file_name, file_content, created_at):
        with self._lock:
            self.jobs[import_id] = ImportJob(
                import_id=import_id, file_name=file_name, file_content=file_content, created_at=created_at
            )

    def get(self, import_id) -> Optional[ImportJob]:
        with self._lock:
            return self.jobs.get(import_id)

    def update_progress(self, import_id, *, processed, total, status, error_log=None):
        with self._lock:
            job = self.jobs[import_id]
            changes = {"processed_rows": processed, "status": status}
            if total > 0:
                changes["total_rows"] = total
            if error_log is not None:
                changes["error_log"] = error_log
            if status.is_terminal:
                changes["completed_at"] = now_utc()
            self.jobs[import_id] = replace(job, **changes)
            self.history.append((processed, total, status))


DAY_SHIFT = Shift(shift_id=1, shift_name="Day", start_time=time(9, 0), end_time=time(18, 0))


def make_employee(employee_id: int = 1, **overrides) -> Employee:
    values = {
        "employee_id": employee_id,
        "employee_code": f"EMP{employee_id:03d}",
        "full_name": f"Employee {employee_id}",
        "basic_salary": Decimal("31000.00"),
        "machine_code": 100 + employee_id,
        "shift_id": DAY_SHIFT.shift_id,
    }
    values.update(overrides)
    return Employee(**values)


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def day_shift():
    return DAY_SHIFT


@pytest.fixture
def employees():
    return FakeEmployeesRepo([make_employee(1)])


@pytest.fixture
def sunday_lookups():
    return FakeLookupsRepo([Lookup(lookup_id=1, lookup_type="Weekend", lookup_value="Sunday")])


@pytest.fixture
def shifts():
    return FakeShiftsRepo([DAY_SHIFT])


@pytest.fixture
def shifts_factory():
    return FakeShiftsRepo


@pytest.fixture
def leaves():
    return FakeLeavesRepo()


@pytest.fixture
def attendance():
    return FakeAttendanceRepo()


@pytest.fixture
def allowances():
    return FakeAllowancesRepo()


@pytest.fixture
def payrolls():
    return FakePayrollRepo()


@pytest.fixture
def salary_slips():
    return FakeSalarySlipRepo()


@pytest.fixture
def import_jobs():
    return FakeImportJobsRepo()


@pytest.fixture
def fixed_now():
    return datetime(2025, 2, 3, 10, 0, 0)
