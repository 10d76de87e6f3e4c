from datetime import date

from payroll_system.attendance.aggregator import AttendanceAggregator


class DuplicateDatesRepo:
    def list_present_dates(self, *, employee_id, start, end):
        return [date(2025, 1, 6), date(2025, 1, 6), date(2025, 1, 7), date(2025, 2, 1)]


def test_counts_present_days_in_range(attendance):
    attendance.add_present(1, date(2024, 12, 31), date(2025, 1, 2), date(2025, 1, 3), date(2025, 2, 1))
    attendance.add_present(2, date(2025, 1, 2))

    count = AttendanceAggregator(attendance).count_present_days(
        employee_id=1, start=date(2025, 1, 1), end=date(2025, 1, 31)
    )

    assert count == 2


def test_counts_distinct_dates_only():
    count = AttendanceAggregator(DuplicateDatesRepo()).count_present_days(
        employee_id=1, start=date(2025, 1, 1), end=date(2025, 1, 31)
    )

    assert count == 2
