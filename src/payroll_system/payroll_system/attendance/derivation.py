from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal
from typing import Optional

from ..common.money import round_money
from ..core.enums import AttendanceStatus
from ..shifts.model import Shift
from .model import DerivedFields

DAY = timedelta(hours=24)


def _offset(t: time) -> timedelta:
    return timedelta(hours=t.hour, minutes=t.minute, seconds=t.second, microseconds=t.microsecond)


def worked_span(in_time: time, out_time: time) -> timedelta:
    """out - in, wrapping across midnight for overnight work."""
    span = _offset(out_time) - _offset(in_time)
    if span < timedelta(0):
        span += DAY
    return span


def late_entry(in_time: time, shift: Shift) -> Optional[timedelta]:
    if in_time > shift.start_time:
        return _offset(in_time) - _offset(shift.start_time)
    return None


def early_leave(out_time: time, shift: Shift) -> Optional[timedelta]:
    end = _offset(shift.end_time)
    out = _offset(out_time)

    if not shift.is_overnight:
        return end - out if out < end else None

    # Overnight shift: an out-time before the shift start is on the next day.
    if out_time < shift.start_time:
        return end - out if out < end else None
    return (DAY - out) + end


def derive_fields(in_time: Optional[time], out_time: Optional[time], shift: Optional[Shift]) -> DerivedFields:
    """Status, working hours and late/early offsets for an attendance record."""
    if in_time is None and out_time is None:
        return DerivedFields(status=AttendanceStatus.ABSENT)

    if in_time is None or out_time is None:
        # Incomplete day: present, but no duration can be measured.
        return DerivedFields(status=AttendanceStatus.PRESENT)

    hours = round_money(Decimal(worked_span(in_time, out_time).total_seconds()) / Decimal(3600))
    if shift is None:
        return DerivedFields(status=AttendanceStatus.PRESENT, working_hours=hours)

    return DerivedFields(
        status=AttendanceStatus.PRESENT,
        working_hours=hours,
        late_entry=late_entry(in_time, shift),
        early_leave=early_leave(out_time, shift),
    )
