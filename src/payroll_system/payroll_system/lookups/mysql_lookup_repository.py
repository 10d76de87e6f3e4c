from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Lookup
from .repository import LookupRepository


class MySQLLookupRepository(LookupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_by_type(self, lookup_type: str) -> Sequence[Lookup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lookup_id, lookup_type, lookup_value, display_order, is_active
                FROM lookups
                WHERE lookup_type=%s
                ORDER BY display_order, lookup_value
                """,
                (lookup_type,),
            )
            return [
                Lookup(
                    lookup_id=int(r["lookup_id"]),
                    lookup_type=r["lookup_type"],
                    lookup_value=r["lookup_value"],
                    display_order=int(r.get("display_order") or 0),
                    is_active=bool(r.get("is_active")),
                )
                for r in fetchall(cur)
            ]
