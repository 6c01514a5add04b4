"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
Values that operators may tune live in the settings modules instead.
"""

from datetime import time

DEFAULT_WORK_START = time(9, 0, 0)
DEFAULT_WORK_END = time(18, 0, 0)
DEFAULT_TOKEN_MINUTES = 60 * 24
DEFAULT_LEAVE_ENTITLEMENTS = {"annual": 15, "sick": 10}
DEFAULT_CONTRACT_KEY = "default"
RECENT_ACTIVITY_LIMIT = 10
MAX_REPORT_HOURS = 24
