from __future__ import annotations

from datetime import date


def clipped_length(range_start: date, range_end: date, window_start: date, window_end: date) -> int:
    """Inclusive day count of [range_start, range_end] ∩ [window_start, window_end].

    Returns 0 when the ranges do not intersect (or either range is empty).
    """
    start = max(range_start, window_start)
    end = min(range_end, window_end)
    if end < start:
        return 0
    return (end - start).days + 1


def overlaps(range_start: date, range_end: date, window_start: date, window_end: date) -> bool:
    return range_start <= window_end and range_end >= window_start
