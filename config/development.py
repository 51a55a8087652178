from config.config import Config

SECRET_KEY = Config.SECRET_KEY
LOG_LEVEL = "DEBUG"
DEBUG = True

STORAGE_BACKEND = Config.STORAGE_BACKEND
STORAGE_DIR = Config.STORAGE_DIR
DB_CONFIG = Config.db_config()
# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = Config.AUTO_INIT_DB

ATTENDANCE_ENDPOINT = Config.ATTENDANCE_ENDPOINT
ERP_ORIGIN = Config.ERP_ORIGIN
ERP_REFERER = Config.ERP_REFERER
USER_AGENT = Config.USER_AGENT

PACING_DELAY_SECONDS = Config.PACING_DELAY_SECONDS
AUTO_EXECUTE = Config.AUTO_EXECUTE
LOG_CAPACITY = Config.LOG_CAPACITY
BATCH_IN_BACKGROUND = Config.BATCH_IN_BACKGROUND
