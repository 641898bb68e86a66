"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Statuses meaning "this endpoint shape does not apply here".
SOFT_FAILURE_STATUSES = frozenset({401, 403, 404, 405})

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_LOGS_PAGE_SIZE = 1000
DEFAULT_LOGS_SORT = "desc"

HOURS_DECIMALS = 2

# Food allowance (IQD) used when the server omits per-day food values.
FOOD_ALLOWANCE_FULL_DAY_IQD = 4000
FOOD_ALLOWANCE_HALF_DAY_IQD = 2000
FOOD_ALLOWANCE_FULL_DAY_HOURS = 13

EMPLOYEE_UID_PREFIX = "EMP"

# Roles allowed to edit, by feature; EDITOR_ROLES in settings replaces the first.
EDITOR_ROLES = frozenset({"admin", "hr"})
ADVANCE_EDITOR_ROLES = frozenset({"admin", "accountant"})
