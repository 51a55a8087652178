"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STORAGE_KEY = "attendance_users_v1"

DEFAULT_LOG_CAPACITY = 100
DEFAULT_PACING_DELAY_SECONDS = 1.2

TOKEN_PREVIEW_LENGTH = 8
AUTO_EXECUTE_MIN_IDENTIFIER_LENGTH = 6

SESSION_COOKIE_NAME = "connect.sid"

DEFAULT_ATTENDANCE_ENDPOINT = "https://student.bennetterp.camu.in/api/Attendance/record-online-attendance"
DEFAULT_ERP_ORIGIN = "https://student.bennetterp.camu.in"
DEFAULT_ERP_REFERER = "https://student.bennetterp.camu.in/v2/timetable"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)
