"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Monday=0 .. Saturday=5
DEFAULT_REGULAR_WEEKDAYS = frozenset({0, 1, 2, 3, 4, 5})

MAX_NAME_LENGTH = 50
MIN_BASE_SALARY = 1000
MIN_DEPARTMENT_HOURS = 1
MAX_DEPARTMENT_HOURS = 24
MIN_ENTRY_HOURS = 0
MAX_ENTRY_HOURS = 24

# Used when an employee's department is missing from the snapshot.
DEFAULT_DEPARTMENT_HOURS = 12

DEFAULT_REQUEST_TIMEOUT_SECONDS = 20
