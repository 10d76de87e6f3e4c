from datetime import date

from payroll_system.core.enums import LeaveStatus
from payroll_system.leaves.aggregator import LeaveAggregator


def test_leave_days_are_clipped_to_the_period(leaves):
    leaves.add(employee_id=1, leave_type="Casual", start_date=date(2024, 12, 30), end_date=date(2025, 1, 3))
    leaves.add(employee_id=1, leave_type="Unpaid", start_date=date(2025, 1, 10), end_date=date(2025, 1, 12))
    leaves.add(employee_id=1, leave_type="Sick", start_date=date(2025, 1, 30), end_date=date(2025, 2, 2))

    days = LeaveAggregator(leaves).leave_days(employee_id=1, start=date(2025, 1, 1), end=date(2025, 1, 31))

    assert days.paid_days == 3 + 2
    assert days.unpaid_days == 3


def test_only_approved_leave_of_the_employee_counts(leaves):
    leaves.add(employee_id=1, leave_type="Casual", start_date=date(2025, 1, 6), end_date=date(2025, 1, 7),
               status=LeaveStatus.PENDING)
    leaves.add(employee_id=1, leave_type="Casual", start_date=date(2025, 1, 8), end_date=date(2025, 1, 9),
               status=LeaveStatus.REJECTED)
    leaves.add(employee_id=2, leave_type="Unpaid", start_date=date(2025, 1, 8), end_date=date(2025, 1, 9))

    days = LeaveAggregator(leaves).leave_days(employee_id=1, start=date(2025, 1, 1), end=date(2025, 1, 31))

    assert (days.paid_days, days.unpaid_days) == (0, 0)
