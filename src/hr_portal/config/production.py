import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/var/lib/hr-portal/uploads")
UPLOAD_BASE_URL = os.getenv("UPLOAD_BASE_URL", "/uploads")

DEFAULT_VACATION_ENTITLEMENT = int(os.getenv("DEFAULT_VACATION_ENTITLEMENT", "30"))

PROBATION_CHECK_ENABLED = bool(int(os.getenv("PROBATION_CHECK_ENABLED", "1")))
PROBATION_CHECK_COMPANY_ID = os.getenv("PROBATION_CHECK_COMPANY_ID", "")
PROBATION_CHECK_INTERVAL_SECONDS = int(os.getenv("PROBATION_CHECK_INTERVAL_SECONDS", "3600"))
