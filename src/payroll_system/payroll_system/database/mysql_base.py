from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def unique_violation_as_conflict(message: str):
    """Translate a duplicate-key error raised inside the block into ConflictError."""
    try:
        yield
    except IntegrityError as exc:
        if exc.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError(message) from exc
        raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_interval(value: Any) -> Optional[timedelta]:
    """TIME column as a duration.

    mysql-connector returns TIME as timedelta; a time or an 'HH:MM[:SS]' string
    is accepted as well.
    """
    if value is None:
        return None
    if isinstance(value, timedelta):
        return value
    if isinstance(value, time):
        return timedelta(hours=value.hour, minutes=value.minute, seconds=value.second)
    if isinstance(value, str):
        hours, minutes, *rest = value.strip().split(":")
        seconds = float(rest[0]) if rest and rest[0] else 0.0
        return timedelta(hours=int(hours), minutes=int(minutes), seconds=int(seconds))
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME column as a time of day (wrapped into [00:00, 24:00))."""
    span = normalize_mysql_interval(value)
    if span is None:
        return None
    seconds = int(span.total_seconds()) % 86400
    return time(hour=seconds // 3600, minute=(seconds % 3600) // 60, second=seconds % 60)
