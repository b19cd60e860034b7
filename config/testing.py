import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "dojo_register_test"),
    "pool_size": 2,
    "pool_timeout": 1.0,
}

TOKEN_MAX_AGE_SECONDS = 60 * 60

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
