from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal
from typing import Optional, Sequence

from ..common.money import to_decimal
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    normalize_mysql_interval,
    normalize_mysql_time,
    unique_violation_as_conflict,
)
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, employee_id, shift_id, attendance_date, in_time, out_time,
                       status, working_hours, late_entry, early_leave
                FROM attendances
                WHERE employee_id=%s AND attendance_date=%s
                """,
                (int(employee_id), attendance_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceRecord(
                attendance_id=int(r["attendance_id"]),
                employee_id=int(r["employee_id"]),
                attendance_date=r["attendance_date"],
                in_time=normalize_mysql_time(r.get("in_time")),
                out_time=normalize_mysql_time(r.get("out_time")),
                status=AttendanceStatus(r["status"]),
                shift_id=int(r["shift_id"]) if r.get("shift_id") is not None else None,
                working_hours=to_decimal(r.get("working_hours")),
                late_entry=normalize_mysql_interval(r.get("late_entry")),
                early_leave=normalize_mysql_interval(r.get("early_leave")),
            )

    def exists(self, employee_id: int, attendance_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS hit FROM attendances WHERE employee_id=%s AND attendance_date=%s LIMIT 1",
                (int(employee_id), attendance_date),
            )
            return fetchone(cur) is not None

    def list_present_dates(self, *, employee_id: int, start: date, end: date) -> Sequence[date]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT attendance_date
                FROM attendances
                WHERE employee_id=%s AND attendance_date BETWEEN %s AND %s AND status=%s
                """,
                (int(employee_id), start, end, AttendanceStatus.PRESENT.value),
            )
            return [r["attendance_date"] for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: int,
        attendance_date: date,
        shift_id: int,
        in_time: Optional[time],
        out_time: Optional[time],
        status: AttendanceStatus,
        working_hours: Decimal,
        late_entry: Optional[timedelta],
        early_leave: Optional[timedelta],
    ) -> int:
        message = f"Attendance record already exists for employee {employee_id} on {attendance_date:%Y-%m-%d}"
        with unique_violation_as_conflict(message), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendances(
                    employee_id, shift_id, attendance_date, in_time, out_time,
                    status, working_hours, late_entry, early_leave
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    int(shift_id),
                    attendance_date,
                    in_time,
                    out_time,
                    status.value,
                    working_hours,
                    late_entry,
                    early_leave,
                ),
            )
            return int(cur.lastrowid)
