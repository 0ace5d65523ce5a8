import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "aquador"),
    "connection_timeout": int(os.getenv("DB_TIMEOUT", "10")),
}

# Local time of the school; "today" and the billing calendar follow it.
TIMEZONE = os.getenv("TIMEZONE", "America/Port-au-Prince")

PUNCTUALITY_GRACE_MINUTES = int(os.getenv("PUNCTUALITY_GRACE_MINUTES", "15"))
BILLING_GRACE_LAST_DAY = int(os.getenv("BILLING_GRACE_LAST_DAY", "7"))
BILLING_PARTIAL_FROM_DAY = int(os.getenv("BILLING_PARTIAL_FROM_DAY", "16"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
