"""Tolerant readers for punch export spreadsheets.

Cells may hold native temporal values, spreadsheet serial numbers or text in a
handful of regional formats; every parser returns None instead of raising.
"""

from __future__ import annotations

import io
import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Sequence

import pandas as pd
from openpyxl import load_workbook

from ..core.exceptions import ValidationError

# Day zero of spreadsheet serial dates (1900 date system, leap-year bug included).
SERIAL_EPOCH = datetime(1899, 12, 30)
DAY = timedelta(days=1)

# Tried in order; the first successful parse wins. Day-first wins for ambiguous text.
DATE_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
    "%d-%m-%Y",
    "%m-%d-%Y",
)

# [d.]hh:mm[:ss[.fffffff]]
_DURATION_RE = re.compile(r"^(?:(\d+)\.)?(\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.(\d{1,7}))?)?$")


@dataclass(frozen=True)
class PunchColumns:
    mid: int
    date: int
    time: int


def read_rows(content: bytes) -> list[tuple]:
    """All rows (header included) of the first worksheet, as cell values."""
    wb = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        ws = wb.worksheets[0]
        return [tuple(r) for r in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def locate_columns(header: Sequence[Any]) -> PunchColumns:
    names = [str(h).strip().lower() if h is not None else "" for h in header]

    def index_of(name: str) -> int:
        return names.index(name) if name in names else -1

    mid, day, clock = index_of("mid"), index_of("date"), index_of("time")
    if mid == -1 or day == -1 or clock == -1:
        raise ValidationError("Missing required columns: Mid, Date, Time")
    return PunchColumns(mid=mid, date=day, time=clock)


def cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def _generic_datetime(text: str) -> Optional[datetime]:
    parsed = pd.to_datetime(text, errors="coerce")
    if parsed is None or pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def parse_machine_id(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def parse_punch_date(value: Any) -> Optional[date]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        try:
            return (SERIAL_EPOCH + timedelta(days=float(value))).date()
        except (OverflowError, ValueError):
            return None

    text = str(value).strip()
    if not text:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    parsed = _generic_datetime(text)
    return parsed.date() if parsed else None


def _parse_duration(text: str) -> Optional[timedelta]:
    m = _DURATION_RE.match(text)
    if not m:
        return None
    days, hours, minutes, seconds, fraction = m.groups()
    if int(hours) > 23 or int(minutes) > 59 or (seconds and int(seconds) > 59):
        return None
    return timedelta(
        days=int(days or 0),
        hours=int(hours),
        minutes=int(minutes),
        seconds=int(seconds or 0),
        microseconds=int((fraction or "0").ljust(7, "0")[:6]),
    )


def parse_punch_time(value: Any) -> Optional[timedelta]:
    """Offset from midnight of the punch day."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value - datetime.combine(value.date(), time.min)
    if isinstance(value, date):
        return timedelta(0)
    if isinstance(value, time):
        return timedelta(hours=value.hour, minutes=value.minute, seconds=value.second, microseconds=value.microsecond)
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        fraction = float(value) - math.floor(value)
        return timedelta(milliseconds=round(fraction * 86_400_000)) % DAY

    text = str(value).strip()
    if not text:
        return None
    if _DURATION_RE.match(text):
        return _parse_duration(text)

    parsed = _generic_datetime(text)
    if parsed is None:
        return None
    return parsed - datetime.combine(parsed.date(), time.min)
