import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "var/uploads")
UPLOAD_BASE_URL = os.getenv("UPLOAD_BASE_URL", "/uploads")

DEFAULT_VACATION_ENTITLEMENT = int(os.getenv("DEFAULT_VACATION_ENTITLEMENT", "30"))

PROBATION_CHECK_ENABLED = bool(int(os.getenv("PROBATION_CHECK_ENABLED", "0")))
PROBATION_CHECK_COMPANY_ID = os.getenv("PROBATION_CHECK_COMPANY_ID", "")
PROBATION_CHECK_INTERVAL_SECONDS = int(os.getenv("PROBATION_CHECK_INTERVAL_SECONDS", "3600"))
