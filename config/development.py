import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# mysql | rest | memory
BACKEND = os.getenv("BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_book"),
}

REST_BASE_URL = os.getenv("REST_BASE_URL", "http://localhost:3000")
REST_TIMEOUT_SECONDS = float(os.getenv("REST_TIMEOUT_SECONDS", "10"))

LOCK_COOLDOWN_HOURS = float(os.getenv("LOCK_COOLDOWN_HOURS", "20"))
HISTORY_POLL_SECONDS = int(os.getenv("HISTORY_POLL_SECONDS", "60"))

AVATAR_DIR = os.getenv("AVATAR_DIR", "instance/avatars")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
