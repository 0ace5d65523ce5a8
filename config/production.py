import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "aquador"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "aquador"),
    "connection_timeout": int(os.getenv("DB_TIMEOUT", "5")),
}

TIMEZONE = os.getenv("TIMEZONE", "America/Port-au-Prince")

PUNCTUALITY_GRACE_MINUTES = int(os.getenv("PUNCTUALITY_GRACE_MINUTES", "15"))
BILLING_GRACE_LAST_DAY = int(os.getenv("BILLING_GRACE_LAST_DAY", "7"))
BILLING_PARTIAL_FROM_DAY = int(os.getenv("BILLING_PARTIAL_FROM_DAY", "16"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
