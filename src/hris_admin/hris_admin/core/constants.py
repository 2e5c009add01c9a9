"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# In-process caches (HRIS data, local data)
LOCAL_CACHE_TTL_SECONDS = 30 * 60

# HRIS token lifetime when the JWT carries no exp claim
DEFAULT_TOKEN_LIFETIME_SECONDS = 60 * 60
HRIS_DIVISION_LEVEL = 3
HRIS_SECTION_LEVEL = 4

# Redis report cache
DIVISION_REPORT_TTL_SECONDS = 3600
SECTION_REPORT_TTL_SECONDS = 3600
EMPLOYEE_REPORT_TTL_SECONDS = 1800
REPORT_CACHE_PREFIXES = ("div_report:", "sec_report:", "emp_report:")

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000

SECTION_CODE_MAX_LENGTH = 10

DEFAULT_RECENT_ACTIVITIES = 5
MAX_RECENT_ACTIVITIES = 20
DEFAULT_TREND_DAYS = 7
