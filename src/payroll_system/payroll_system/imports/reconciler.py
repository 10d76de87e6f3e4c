from __future__ import annotations

import logging
import threading
from datetime import date, datetime, time
from typing import Optional

from ..attendance.model import NewAttendance
from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceService
from ..core.constants import (
    IMPORT_DIAGNOSTIC_CAPACITY,
    IMPORT_DIAGNOSTIC_PREFIX,
    IMPORT_EMPTY_DIAGNOSTIC_PREFIX,
    IMPORT_ERROR_PREFIX,
    IMPORT_GROUP_PROGRESS_INTERVAL,
    IMPORT_ROW_PROGRESS_INTERVAL,
)
from ..core.enums import ImportStatus
from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..lookups.weekend import WeekendPolicyResolver
from .parsing import cell, locate_columns, parse_machine_id, parse_punch_date, parse_punch_time, read_rows
from .repository import ImportJobRepository

logger = logging.getLogger(__name__)


class ImportCancelled(Exception):
    """Raised inside a run when its cancel token is set."""

    def __init__(self):
        super().__init__("Import cancelled")


class Diagnostics:
    """Bounded list of human-readable notes attached to the job log."""

    def __init__(self, capacity: int = IMPORT_DIAGNOSTIC_CAPACITY):
        self._capacity = capacity
        self._items: list[str] = []

    def add(self, message: str) -> None:
        if len(self._items) < self._capacity:
            self._items.append(message)

    def head(self, n: int) -> list[str]:
        return self._items[:n]

    def __len__(self) -> int:
        return len(self._items)


class PunchReconciler:
    """Turns an uploaded punch export into attendance records.

    Rows are mapped to employees by machine code, weekend punches are dropped and
    the rest grouped per (employee, date): the earliest punch is the in time and
    the latest the out time. Days that already have a record are left alone, so
    re-running the same file creates nothing new.
    """

    def __init__(
        self,
        jobs: ImportJobRepository,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        attendance_service: AttendanceService,
        *,
        weekends: WeekendPolicyResolver,
    ):
        self._jobs = jobs
        self._employees = employees
        self._attendance = attendance
        self._attendance_service = attendance_service
        self._weekends = weekends

    def run(self, import_id: str, cancel: Optional[threading.Event] = None) -> None:
        job = self._jobs.get(import_id)
        if not job:
            raise NotFoundError(f"Import {import_id} not found")
        if job.status != ImportStatus.PENDING:
            raise ConflictError(f"Import {import_id} has already been run (status {job.status.value})")

        diagnostics = Diagnostics()
        progress = {"processed": 0}

        def report(processed: int, total: int, status: ImportStatus, error_log: Optional[str] = None) -> None:
            progress["processed"] = processed
            self._jobs.update_progress(import_id, processed=processed, total=total, status=status, error_log=error_log)

        logger.info("[import] start id=%s file=%s", import_id, job.file_name)
        try:
            self._reconcile(job.file_content, report, diagnostics, cancel)
        except Exception as exc:
            if isinstance(exc, (ImportCancelled, ValidationError)):
                logger.warning("[import] failed id=%s: %s", import_id, exc)
            else:
                logger.exception("[import] failed id=%s", import_id)
            message = f"Error: {exc}"
            if len(diagnostics):
                message += "\n\nDebug Info:\n" + "\n".join(diagnostics.head(IMPORT_DIAGNOSTIC_PREFIX))
            report(progress["processed"], 0, ImportStatus.FAILED, message)

    def _reconcile(self, content: bytes, report, diagnostics: Diagnostics, cancel: Optional[threading.Event]) -> None:
        def check_cancelled() -> None:
            if cancel is not None and cancel.is_set():
                raise ImportCancelled()

        report(0, 0, ImportStatus.PROCESSING)

        rows = read_rows(content)
        if not rows:
            raise ValidationError("The uploaded file has no worksheet rows")
        columns = locate_columns(rows[0])
        data_rows = rows[1:]
        total_rows = len(data_rows)
        report(0, total_rows, ImportStatus.PROCESSING)

        weekend = self._weekends.resolve()
        known = self._employees.list_with_machine_code()
        by_machine_code = {e.machine_code: e for e in known if e.is_active and e.machine_code is not None}
        inactive = {e.machine_code: e for e in known if not e.is_active and e.machine_code is not None}

        groups: dict[tuple[int, date], list[datetime]] = {}
        reported_mids: set[int] = set()
        weekend_rows = 0

        for i, row in enumerate(data_rows, start=1):
            check_cancelled()
            if i % IMPORT_ROW_PROGRESS_INTERVAL == 0:
                report(i, total_rows, ImportStatus.PROCESSING)

            mid = parse_machine_id(cell(row, columns.mid))
            if mid is None:
                continue

            raw_date = cell(row, columns.date)
            raw_time = cell(row, columns.time)
            punch_date = parse_punch_date(raw_date)
            if punch_date is None:
                diagnostics.add(f"Row {i}: Invalid date format - {raw_date}")
                continue
            offset = parse_punch_time(raw_time)
            if offset is None:
                diagnostics.add(f"Row {i}: Invalid time format - {raw_time}")
                continue

            # The weekend rule applies to the punch's own date, not the date after a day offset.
            if weekend.is_weekend(punch_date):
                weekend_rows += 1
                continue
            stamp = datetime.combine(punch_date, time.min) + offset

            employee = by_machine_code.get(mid)
            if employee is None:
                if mid not in reported_mids:
                    reported_mids.add(mid)
                    other = inactive.get(mid)
                    if other is not None:
                        diagnostics.add(f"MID {mid} belongs to {other.status} employee: {other.full_name}")
                    else:
                        diagnostics.add(f"MID {mid} not found in system")
                continue

            groups.setdefault((employee.employee_id, stamp.date()), []).append(stamp)

        logger.info("[import] parsed rows=%s groups=%s weekend_rows=%s", total_rows, len(groups), weekend_rows)

        if not groups:
            message = "No valid records found. Check Date Formats and Machine IDs."
            message += "\n\nDebug Info:\n" + "\n".join(diagnostics.head(IMPORT_EMPTY_DIAGNOSTIC_PREFIX))
            report(0, 0, ImportStatus.COMPLETED, message)
            return

        total_groups = len(groups)
        report(0, total_groups, ImportStatus.SAVING)

        created = skipped = 0
        errors: list[str] = []
        for processed, ((employee_id, day), stamps) in enumerate(groups.items(), start=1):
            check_cancelled()
            in_time = min(stamps).time()
            out_time: Optional[time] = max(stamps).time()
            if out_time == in_time:
                out_time = None

            if self._attendance.exists(employee_id, day):
                skipped += 1
            else:
                try:
                    self._attendance_service.record_attendance(
                        NewAttendance(employee_id=employee_id, attendance_date=day, in_time=in_time, out_time=out_time)
                    )
                    created += 1
                except ConflictError:
                    skipped += 1
                except DomainError as exc:
                    errors.append(f"Emp {employee_id} on {day:%d/%m}: {exc}")

            if processed % IMPORT_GROUP_PROGRESS_INTERVAL == 0:
                report(processed, total_groups, ImportStatus.SAVING)

        logger.info("[import] saved created=%s skipped=%s errors=%s", created, skipped, len(errors))

        if errors:
            message = " | ".join(errors[:IMPORT_ERROR_PREFIX])
        else:
            message = (
                f"Import successful. Processed {total_groups} attendance records "
                f"({created} created, {skipped} already present)."
            )
        if len(diagnostics):
            message += "\n\nDebug Info:\n" + "\n".join(diagnostics.head(IMPORT_DIAGNOSTIC_PREFIX))
        report(total_groups, total_groups, ImportStatus.COMPLETED, message)
