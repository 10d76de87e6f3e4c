from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.enums import ImportStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import ImportJob
from .repository import ImportJobRepository


class MySQLImportJobRepository(ImportJobRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, import_id: str, file_name: str, file_content: bytes, created_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_import_files(
                    import_id, file_name, file_content, status, total_rows, processed_rows, created_at
                )
                VALUES(%s,%s,%s,%s,0,0,%s)
                """,
                (import_id, file_name, file_content, ImportStatus.PENDING.value, created_at),
            )

    def get(self, import_id: str) -> Optional[ImportJob]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT import_id, file_name, file_content, status, total_rows, processed_rows,
                       error_log, created_at, completed_at
                FROM attendance_import_files
                WHERE import_id=%s
                """,
                (import_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ImportJob(
                import_id=r["import_id"],
                file_name=r.get("file_name") or "",
                file_content=bytes(r.get("file_content") or b""),
                status=ImportStatus(r["status"]),
                total_rows=int(r.get("total_rows") or 0),
                processed_rows=int(r.get("processed_rows") or 0),
                error_log=r.get("error_log"),
                created_at=r.get("created_at"),
                completed_at=r.get("completed_at"),
            )

    def update_progress(
        self,
        import_id: str,
        *,
        processed: int,
        total: int,
        status: ImportStatus,
        error_log: Optional[str] = None,
    ) -> None:
        sets = ["processed_rows=%s", "status=%s"]
        params: list[object] = [int(processed), status.value]
        if total > 0:
            sets.append("total_rows=%s")
            params.append(int(total))
        if error_log is not None:
            sets.append("error_log=%s")
            params.append(error_log)
        if status.is_terminal:
            sets.append("completed_at=%s")
            params.append(now_utc())
        params.append(import_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE attendance_import_files SET {', '.join(sets)} WHERE import_id=%s", tuple(params))
