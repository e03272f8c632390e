import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

BACKEND = os.getenv("BACKEND", "mysql")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_book"),
}

REST_BASE_URL = os.getenv("REST_BASE_URL", "")
REST_TIMEOUT_SECONDS = float(os.getenv("REST_TIMEOUT_SECONDS", "10"))

LOCK_COOLDOWN_HOURS = float(os.getenv("LOCK_COOLDOWN_HOURS", "20"))
HISTORY_POLL_SECONDS = int(os.getenv("HISTORY_POLL_SECONDS", "60"))

AVATAR_DIR = os.getenv("AVATAR_DIR", "instance/avatars")

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
