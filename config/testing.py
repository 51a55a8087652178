import os
import tempfile

SECRET_KEY = "test-secret"
LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

STORAGE_BACKEND = "file"
STORAGE_DIR = os.getenv("STORAGE_DIR", tempfile.mkdtemp(prefix="attendance-relay-"))
DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_relay_test"),
}
AUTO_INIT_DB = False

ATTENDANCE_ENDPOINT = "http://erp.invalid/api/Attendance/record-online-attendance"
ERP_ORIGIN = "http://erp.invalid"
ERP_REFERER = "http://erp.invalid/v2/timetable"
USER_AGENT = "attendance-relay-tests"

PACING_DELAY_SECONDS = 0.0
AUTO_EXECUTE = False
LOG_CAPACITY = 100
BATCH_IN_BACKGROUND = False
