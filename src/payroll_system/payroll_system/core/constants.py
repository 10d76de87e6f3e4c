"""Constants and defaults.

Note: Keep business constants here to avoid magic numbers spread across code.
"""

# Allowances are only paid when the employee was present at least this many days.
ALLOWANCE_MIN_PRESENT_DAYS = 7

WEEKEND_LOOKUP_TYPE = "Weekend"
UNPAID_LEAVE_TYPE = "Unpaid"
ACTIVE_EMPLOYEE_STATUS = "Active"
BLOCKED_EMPLOYEE_STATUSES = frozenset({"resigned", "on leave"})

VALID_LEAVE_TYPES = ("Casual", "Sick", "Earned", "Unpaid")
LEAVE_REMARKS_MAX_LENGTH = 500

MAX_PERCENTAGE = 100
MAX_FIXED_AMOUNT = 999999999.99

IMPORT_ROW_PROGRESS_INTERVAL = 50
IMPORT_GROUP_PROGRESS_INTERVAL = 10
IMPORT_DIAGNOSTIC_CAPACITY = 200
IMPORT_DIAGNOSTIC_PREFIX = 10
IMPORT_EMPTY_DIAGNOSTIC_PREFIX = 20
IMPORT_ERROR_PREFIX = 5
DEFAULT_IMPORT_WORKERS = 2
