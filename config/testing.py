import os
import tempfile

SECRET_KEY = "test-secret"

BACKEND = "memory"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_book_test"),
}

REST_BASE_URL = "http://rest.test"
REST_TIMEOUT_SECONDS = 5.0

LOCK_COOLDOWN_HOURS = 20
HISTORY_POLL_SECONDS = 60

AVATAR_DIR = os.path.join(tempfile.gettempdir(), "attendance_book_avatars")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
