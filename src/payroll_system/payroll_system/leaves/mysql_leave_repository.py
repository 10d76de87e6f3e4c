from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = "leave_id, employee_id, leave_type, start_date, end_date, leave_status, remarks"


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=r["leave_type"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus(r["leave_status"]),
        remarks=r.get("remarks"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_in_period(self, *, employee_id: int, start: date, end: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leaves
                WHERE employee_id=%s AND leave_status=%s AND start_date<=%s AND end_date>=%s
                ORDER BY start_date
                """,
                (int(employee_id), LeaveStatus.APPROVED.value, end, start),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def has_overlap(
        self,
        *,
        employee_id: int,
        start: date,
        end: date,
        exclude_leave_id: Optional[int] = None,
    ) -> bool:
        clauses = ["employee_id=%s", "leave_status<>%s", "start_date<=%s", "end_date>=%s"]
        params: list[object] = [int(employee_id), LeaveStatus.REJECTED.value, end, start]
        if exclude_leave_id is not None:
            clauses.append("leave_id<>%s")
            params.append(int(exclude_leave_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT 1 AS hit FROM leaves WHERE {' AND '.join(clauses)} LIMIT 1", tuple(params))
            return fetchone(cur) is not None

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leaves WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def create(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        status: LeaveStatus,
        remarks: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(employee_id, leave_type, start_date, end_date, total_days, leave_status, remarks)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(employee_id),
                    leave_type,
                    start_date,
                    end_date,
                    (end_date - start_date).days + 1,
                    status.value,
                    remarks,
                ),
            )
            return int(cur.lastrowid)

    def update_status(self, *, leave_id: int, status: LeaveStatus, remarks: Optional[str] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leaves SET leave_status=%s, remarks=%s WHERE leave_id=%s",
                (status.value, remarks, int(leave_id)),
            )
            return cur.rowcount > 0
