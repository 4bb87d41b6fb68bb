import os

SECRET_KEY = "test-secret"
JWT_SECRET = "test-jwt-secret-0123456789abcdef0123"
JWT_EXPIRES_HOURS = 1

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "meeting_tracker_test"),
}

DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "uploads-test")
MAX_FILE_SIZE = 10 * 1024 * 1024

LOG_LEVEL = "WARNING"
DEBUG = False
TESTING = True

AUTO_SEED_DB = False
