from datetime import date, datetime, time, timedelta

import pytest

from payroll_system.core.exceptions import ValidationError
from payroll_system.imports.parsing import (
    locate_columns,
    parse_machine_id,
    parse_punch_date,
    parse_punch_time,
)


def test_locate_columns_is_case_insensitive():
    columns = locate_columns(["No", " MID ", "date", "TIME", None])

    assert (columns.mid, columns.date, columns.time) == (1, 2, 3)


def test_locate_columns_requires_all_three():
    with pytest.raises(ValidationError, match="Missing required columns"):
        locate_columns(["Employee", "Date", "Time"])


@pytest.mark.parametrize(
    "value, expected",
    [(101, 101), (101.0, 101), (" 101 ", 101), (101.5, None), ("abc", None), (True, None), (None, None)],
)
def test_parse_machine_id(value, expected):
    assert parse_machine_id(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2025-01-06", date(2025, 1, 6)),
        ("06/01/2025", date(2025, 1, 6)),
        ("01/13/2025", date(2025, 1, 13)),
        ("2025/01/06", date(2025, 1, 6)),
        ("06-01-2025", date(2025, 1, 6)),
        (45663, date(2025, 1, 6)),
        (45663.75, date(2025, 1, 6)),
        (datetime(2025, 1, 6, 9, 30), date(2025, 1, 6)),
        (date(2025, 1, 6), date(2025, 1, 6)),
    ],
)
def test_parse_punch_date(value, expected):
    assert parse_punch_date(value) == expected


@pytest.mark.parametrize("value", ["bogus", "", None, False])
def test_parse_punch_date_rejects(value):
    assert parse_punch_date(value) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("09:05", timedelta(hours=9, minutes=5)),
        ("9:05:30", timedelta(hours=9, minutes=5, seconds=30)),
        ("18:00:00.5", timedelta(hours=18, milliseconds=500)),
        (0.5, timedelta(hours=12)),
        (45663.75, timedelta(hours=18)),
        (time(8, 55), timedelta(hours=8, minutes=55)),
        (datetime(2025, 1, 6, 17, 45), timedelta(hours=17, minutes=45)),
        (timedelta(hours=7), timedelta(hours=7)),
    ],
)
def test_parse_punch_time(value, expected):
    assert parse_punch_time(value) == expected


@pytest.mark.parametrize("value", ["25:00", "09:75", "later", "", None, True])
def test_parse_punch_time_rejects(value):
    assert parse_punch_time(value) is None
