import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "aquador_test"),
    "connection_timeout": 2,
}

TIMEZONE = "America/Port-au-Prince"

PUNCTUALITY_GRACE_MINUTES = 15
BILLING_GRACE_LAST_DAY = 7
BILLING_PARTIAL_FROM_DAY = 16

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
