import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "hr_portal_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "var/test-uploads")
UPLOAD_BASE_URL = "/uploads"

DEFAULT_VACATION_ENTITLEMENT = 30

PROBATION_CHECK_ENABLED = False
PROBATION_CHECK_COMPANY_ID = ""
PROBATION_CHECK_INTERVAL_SECONDS = 3600
