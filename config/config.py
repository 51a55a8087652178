import os


def _flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "attendance-relay-dev-key"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Credential blob storage: "file" (STORAGE_DIR) or "mysql" (DB_CONFIG)
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "file")
    STORAGE_DIR = os.environ.get("STORAGE_DIR", "instance")

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "attendance_relay")
    AUTO_INIT_DB = _flag("AUTO_INIT_DB")

    # ERP endpoint
    ATTENDANCE_ENDPOINT = os.environ.get(
        "ATTENDANCE_ENDPOINT",
        "https://student.bennetterp.camu.in/api/Attendance/record-online-attendance",
    )
    ERP_ORIGIN = os.environ.get("ERP_ORIGIN", "https://student.bennetterp.camu.in")
    ERP_REFERER = os.environ.get("ERP_REFERER", "https://student.bennetterp.camu.in/v2/timetable")
    USER_AGENT = os.environ.get(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
    )

    # Batch behaviour
    PACING_DELAY_SECONDS = float(os.environ.get("PACING_DELAY_SECONDS", "1.2"))
    AUTO_EXECUTE = _flag("AUTO_EXECUTE")
    LOG_CAPACITY = int(os.environ.get("LOG_CAPACITY", "100"))
    BATCH_IN_BACKGROUND = _flag("BATCH_IN_BACKGROUND", "1")

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
