from __future__ import annotations

from dataclasses import dataclass

from .allowances.evaluator import AllowanceDeductionEvaluator
from .allowances.mysql_allowance_repository import MySQLAllowanceDeductionRepository
from .allowances.service import AllowanceDeductionService
from .attendance.aggregator import AttendanceAggregator
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_IMPORT_WORKERS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .imports.mysql_import_repository import MySQLImportJobRepository
from .imports.reconciler import PunchReconciler
from .imports.runner import ImportJobRunner
from .imports.service import AttendanceImportService
from .leaves.aggregator import LeaveAggregator
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .lookups.mysql_lookup_repository import MySQLLookupRepository
from .lookups.weekend import WeekendPolicyResolver
from .payroll.mysql_payroll_repository import MySQLPayrollRepository, MySQLSalarySlipRepository
from .payroll.salary_slip import SalarySlipService
from .payroll.service import PayrollService
from .shifts.mysql_shift_repository import MySQLShiftRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    employees_repo: MySQLEmployeeRepository
    lookups_repo: MySQLLookupRepository
    shifts_repo: MySQLShiftRepository
    leaves_repo: MySQLLeaveRepository
    attendance_repo: MySQLAttendanceRepository
    allowances_repo: MySQLAllowanceDeductionRepository
    payrolls_repo: MySQLPayrollRepository
    salary_slips_repo: MySQLSalarySlipRepository
    imports_repo: MySQLImportJobRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    allowance_service: AllowanceDeductionService
    payroll_service: PayrollService
    import_runner: ImportJobRunner
    import_service: AttendanceImportService


def build_container(*, db_config: dict, import_workers: int = DEFAULT_IMPORT_WORKERS) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    lookups_repo = MySQLLookupRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    allowances_repo = MySQLAllowanceDeductionRepository(conn)
    payrolls_repo = MySQLPayrollRepository(conn)
    salary_slips_repo = MySQLSalarySlipRepository(conn)
    imports_repo = MySQLImportJobRepository(conn)

    weekends = WeekendPolicyResolver(lookups_repo)
    attendance_service = AttendanceService(attendance_repo, employees_repo, shifts_repo, leaves_repo)
    leave_service = LeaveService(leaves_repo, employees_repo)
    allowance_service = AllowanceDeductionService(allowances_repo, employees_repo)
    payroll_service = PayrollService(
        payrolls_repo,
        employees_repo,
        weekends=weekends,
        leaves=LeaveAggregator(leaves_repo),
        attendance=AttendanceAggregator(attendance_repo),
        adjustments=AllowanceDeductionEvaluator(allowances_repo),
        salary_slips=SalarySlipService(salary_slips_repo),
    )

    reconciler = PunchReconciler(
        imports_repo,
        employees_repo,
        attendance_repo,
        attendance_service,
        weekends=weekends,
    )
    import_runner = ImportJobRunner(imports_repo, max_workers=import_workers)
    import_service = AttendanceImportService(imports_repo, reconciler, import_runner)

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        lookups_repo=lookups_repo,
        shifts_repo=shifts_repo,
        leaves_repo=leaves_repo,
        attendance_repo=attendance_repo,
        allowances_repo=allowances_repo,
        payrolls_repo=payrolls_repo,
        salary_slips_repo=salary_slips_repo,
        imports_repo=imports_repo,
        attendance_service=attendance_service,
        leave_service=leave_service,
        allowance_service=allowance_service,
        payroll_service=payroll_service,
        import_runner=import_runner,
        import_service=import_service,
    )
