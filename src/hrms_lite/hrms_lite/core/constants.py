"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAILY_TREND_DAYS = 30
DAILY_CHART_BUCKETS = 14
TOP_EMPLOYEES_LIMIT = 10
MONTHLY_OVERVIEW_LIMIT = 12

MIN_HISTORY_YEAR = 2000
MAX_HISTORY_YEAR = 2100

UNKNOWN_DEPARTMENT = "Unknown"
ALL_RECORDS_LABEL = "All Records"
